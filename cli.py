#!/usr/bin/env python3
"""Simple CLI for checking the Ronin token dashboard locally"""

import argparse
import asyncio
from typing import Optional

from app.config import settings
from app.logging_config import setup_logging
from app.services.price_resolution import NetworkProbe
from app.services.token_prices import TokenPriceService
from app.types import TokenSnapshot


def print_snapshot(snapshot: TokenSnapshot, limit: Optional[int] = None):
    """Pretty print a token snapshot"""
    meta = snapshot.metadata
    status_icon = {
        "full-success": "🟢",
        "partial-success": "🟡",
        "fallback-mode": "🟠",
        "error": "🔴",
    }.get(meta.api_status.value, "⚪")

    print(f"\n{status_icon} Token Prices ({meta.api_status.value})")
    print("=" * 72)
    print(f"Updated: {meta.last_update}")
    print(f"Live prices: {meta.real_data_tokens}/{meta.total_tokens} ({meta.success_rate})")
    print(f"Network indexed: {'yes' if meta.network_available else 'no'}")
    if meta.error:
        print(f"Error: {meta.error}")

    tokens = snapshot.tokens[:limit] if limit else snapshot.tokens
    print("\n" + "-" * 72)
    print(f"{'Symbol':<10} {'Price (USD)':>14} {'24h':>8} {'7d':>8} {'30d':>8}  {'Best 24h':<10} Src")
    print("-" * 72)
    for token in tokens:
        changes = token.price_changes
        marker = "sim" if token.is_simulated else "live"
        print(
            f"{token.symbol:<10} {token.price_usd:>14.6f} {changes.h24:>7.2f}% {changes.d7:>7.2f}%"
            f" {changes.d30:>7.2f}%  {token.best_swap.h24:<10} {marker}"
        )


async def cli_prices(limit: Optional[int] = None):
    """Build one snapshot in-process and print it"""
    print(f"🔍 Fetching prices from {settings.geckoterminal_base_url} ({settings.network_id})...")
    service = TokenPriceService.from_settings(settings)
    snapshot = await service.get_snapshot()
    print_snapshot(snapshot, limit)


async def cli_probe():
    """Check whether the aggregator indexes the configured network"""
    service = TokenPriceService.from_settings(settings)
    health = await service.provider.health_check()
    print(f"Provider {service.provider.name}: {health.get('status')}")
    if health.get("reason"):
        print(f"   Reason: {health['reason']}")

    for network_id in settings.all_network_ids:
        available = await NetworkProbe(service.provider, network_id).is_available()
        print(f"   {network_id}: {'✅ indexed' if available else '❌ not found'}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ronin Token Dashboard CLI")
    subparsers = parser.add_subparsers(dest="command")

    prices_parser = subparsers.add_parser("prices", help="Fetch and print the token price snapshot")
    prices_parser.add_argument("--limit", type=int, help="Only print the first N tokens")

    subparsers.add_parser("probe", help="Check upstream availability of the network")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host, help="Bind host")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def serve(host: str, port: int, reload: bool = False):
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


async def main(args: argparse.Namespace, parser: argparse.ArgumentParser):
    command = args.command.lower()

    if command == "prices":
        if args.limit is not None and args.limit <= 0:
            raise ValueError("Limit must be positive")
        await cli_prices(args.limit)

    elif command == "probe":
        await cli_probe()

    else:
        print(f"❌ Unknown command: {command}")
        parser.print_help()


def run():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    # uvicorn owns its event loop
    if args.command == "serve":
        serve(args.host, args.port, args.reload)
        return

    setup_logging()
    asyncio.run(main(args, parser))


if __name__ == "__main__":
    run()

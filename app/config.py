from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # GeckoTerminal Provider
    enable_geckoterminal: bool = Field(default=True, description="Enable GeckoTerminal provider")
    geckoterminal_base_url: str = Field(
        default="https://api.geckoterminal.com/api/v2",
        description="Base URL for the GeckoTerminal public API",
        validation_alias=AliasChoices("geckoterminal_base_url", "GECKOTERMINAL_URL"),
    )
    network_id: str = Field(default="ronin", description="Primary GeckoTerminal network slug")
    alternate_network_ids: List[str] = Field(
        default_factory=lambda: ["ron"],
        description="Other slugs the aggregator may register the same chain under",
    )
    user_agent: str = Field(default="RoninTokenDashboard/1.0", description="User-Agent sent upstream")

    # Rate Limiting
    request_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request timeout")
    request_delay_seconds: float = Field(
        default=0.2,
        ge=0,
        description="Pause between per-token lookups to stay under upstream rate limits",
    )

    # Cache Settings
    cache_ttl_seconds: float = Field(default=45.0, gt=0, description="Token snapshot TTL in seconds")

    # Synthetic pricing
    synthetic_time_bucket_ms: int = Field(
        default=1000,
        ge=1,
        description="Granularity of the clock feeding the synthetic price oscillators",
    )

    # Alerts
    alert_history_size: int = Field(default=10, ge=1, description="Number of price alerts retained")

    @property
    def all_network_ids(self) -> List[str]:
        ids = [self.network_id]
        for alt in self.alternate_network_ids:
            if alt and alt not in ids:
                ids.append(alt)
        return ids


# Global settings instance
settings = Settings()

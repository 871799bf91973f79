from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import alerts, health, portfolio, tokens
from .config import settings
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .services.token_prices import TokenPriceService

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Ronin Token Dashboard API",
    description="Live and synthetic prices for Ronin game tokens",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# The composition root owns the price service, its cache and its provider
app.state.token_prices = TokenPriceService.from_settings(settings)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(tokens.router, tags=["Tokens"])
app.include_router(portfolio.router, tags=["Portfolio"])
app.include_router(alerts.router, tags=["Alerts"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Ronin Token Dashboard API",
        "version": "0.1.0",
        "description": "Live and synthetic prices for Ronin game tokens",
        "docs": "/docs",
        "health": "/healthz",
        "tokens": "/api/tokens",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )

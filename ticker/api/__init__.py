"""HTTP routes mimicking the CoinMarketCap and CoinGecko price APIs."""
from ticker.api.routes import build_router

__all__ = ["build_router"]

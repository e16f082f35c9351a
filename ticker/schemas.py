"""Pydantic schemas for the catalog file and the mimicked API responses."""
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class CatalogEntry(BaseModel):
    """One row of the token catalog file. Fields other than these are ignored."""
    model_config = ConfigDict(extra="ignore")

    symbol: StrictStr
    address: StrictStr


class TokenDescriptor(BaseModel):
    """A token as listed by GET /api/v3/coins/list."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Canonical id, e.g. 'ethereum'")
    symbol: str = Field(..., description="Lower-cased ticker symbol")
    name: str = Field(..., description="Display name")
    platforms: dict[str, str] = Field(..., description="Platform name to contract address")


class PriceQuote(BaseModel):
    """A synthesized price. Built per request, never stored."""
    model_config = ConfigDict(frozen=True)

    key: str
    price_usd: Decimal = Field(..., ge=0)
    timestamp: datetime

    @property
    def price_text(self) -> str:
        """Price as a plain decimal string, never in exponent notation."""
        return format(self.price_usd, "f")

    @property
    def last_updated(self) -> str:
        """RFC 3339 timestamp with millisecond precision and a Z suffix."""
        utc = self.timestamp.astimezone(timezone.utc)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @property
    def timestamp_millis(self) -> int:
        """Unix epoch milliseconds."""
        return int(self.timestamp.timestamp()) * 1000 + self.timestamp.microsecond // 1000


# =============================================================================
# COINMARKETCAP-STYLE RESPONSES
# =============================================================================

class UsdQuote(BaseModel):
    price: str
    last_updated: str


class CurrencyQuotes(BaseModel):
    USD: UsdQuote


class SymbolQuote(BaseModel):
    quote: CurrencyQuotes


class QuotesLatestResponse(BaseModel):
    """Response body for GET /cryptocurrency/quotes/latest."""
    data: dict[str, SymbolQuote]


# =============================================================================
# COINGECKO-STYLE RESPONSES
# =============================================================================

class MarketChartResponse(BaseModel):
    """Response body for GET /api/v3/coins/{coin_id}/market_chart."""
    prices: list[tuple[int, float]]


class HealthResponse(BaseModel):
    status: str
    service: str
    sloppy: bool
    tokens: int

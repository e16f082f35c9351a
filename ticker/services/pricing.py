"""
Price synthesizer.

Prices are randomly distributed around base values estimated from real
world prices. Keys are matched exactly (case-sensitive) against a fixed
table holding both ticker symbols and canonical ids; anything else is
priced at zero so callers can exercise their "unpriced token" paths.
"""
import random
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from ticker.schemas import PriceQuote
from ticker import metrics

BASE_PRICES: dict[str, Decimal] = {
    # Ticker symbols
    "ETH": Decimal(200),
    "wBTC": Decimal(9000),
    "BAT": Decimal("0.2"),
    "DAI": Decimal(1),
    "GLM": Decimal(1),
    "tGLM": Decimal(1),
    # Canonical ids
    "ethereum": Decimal(200),
    "wrapped-bitcoin": Decimal(9000),
    "basic-attention-token": Decimal("0.2"),
    "dai": Decimal(1),
    "glm": Decimal(1),
    "tglm": Decimal(1),
}

JITTER_MIN = 0.9
JITTER_MAX = 1.1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceSynthesizer:
    """Produces a randomized quote for a symbol or canonical id."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
        base_prices: Optional[dict[str, Decimal]] = None,
    ):
        """
        Initialize the synthesizer.

        Args:
            rng: Random source. Defaults to a fresh random.Random().
            clock: Returns the current UTC time for quote timestamps.
            base_prices: Base USD price table. Defaults to BASE_PRICES.
        """
        self.rng = rng or random.Random()
        self.clock = clock
        self.base_prices = BASE_PRICES if base_prices is None else base_prices

    def base_price(self, key: str) -> Decimal:
        """Base USD price for a key, zero when the key is unknown."""
        return self.base_prices.get(key, Decimal(0))

    def jitter(self) -> float:
        """Draw a multiplier uniformly from the open interval (0.9, 1.1)."""
        while True:
            factor = self.rng.uniform(JITTER_MIN, JITTER_MAX)
            if JITTER_MIN < factor < JITTER_MAX:
                return factor

    def quote(self, key: str, api: str = "coinmarketcap") -> PriceQuote:
        """
        Synthesize a quote for a key.

        Args:
            key: Ticker symbol or canonical id, matched case-sensitively
            api: Which mimicked API asked, used only for metrics

        Returns:
            Quote with price = base price * jitter, stamped with the current time
        """
        base = self.base_price(key)
        price = base * Decimal(str(self.jitter()))

        metrics.record_quote(api=api, known=key in self.base_prices)

        return PriceQuote(key=key, price_usd=price, timestamp=self.clock())

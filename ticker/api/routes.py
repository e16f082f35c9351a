"""API route handlers for the mimicked price APIs."""
from typing import Optional, Sequence

from fastapi import APIRouter

from ticker.logging import get_logger, log_quote
from ticker.schemas import (
    CurrencyQuotes, SymbolQuote, UsdQuote,
    QuotesLatestResponse,
    MarketChartResponse,
    TokenDescriptor,
)
from ticker.services.faults import FaultInjector
from ticker.services.pricing import PriceSynthesizer

logger = get_logger(__name__)


def build_router(
    catalog: Sequence[TokenDescriptor],
    synthesizer: PriceSynthesizer,
    injector: Optional[FaultInjector] = None,
) -> APIRouter:
    """
    Build the router serving the three mimicked endpoints.

    Args:
        catalog: Tokens listed by the coins list endpoint, loaded once at startup
        synthesizer: Source of randomized prices
        injector: When given, every endpoint is wrapped with fault injection

    Returns:
        Router to include in the application
    """
    router = APIRouter(tags=["ticker"])
    tokens = list(catalog)

    def sloppy(handler):
        return injector.wrap(handler) if injector is not None else handler

    @router.get("/cryptocurrency/quotes/latest", response_model=QuotesLatestResponse)
    @sloppy
    async def coinmarketcap_quotes_latest(symbol: str):
        """
        CoinMarketCap-style latest quote for one symbol.

        Unknown symbols are quoted at zero rather than rejected.
        The price is a decimal string.
        """
        quote = synthesizer.quote(symbol, api="coinmarketcap")

        log_quote(
            logger,
            api="coinmarketcap",
            key=symbol,
            price_usd=quote.price_usd,
            known=symbol in synthesizer.base_prices,
        )

        return QuotesLatestResponse(
            data={
                symbol: SymbolQuote(
                    quote=CurrencyQuotes(
                        USD=UsdQuote(
                            price=quote.price_text,
                            last_updated=quote.last_updated,
                        )
                    )
                )
            }
        )

    @router.get("/api/v3/coins/list", response_model=list[TokenDescriptor])
    @sloppy
    async def coingecko_coins_list():
        """CoinGecko-style list of every token in the catalog."""
        logger.info("coins_listed", token_count=len(tokens))
        return tokens

    @router.get("/api/v3/coins/{coin_id}/market_chart", response_model=MarketChartResponse)
    @sloppy
    async def coingecko_market_chart(coin_id: str):
        """
        CoinGecko-style market chart holding a single [epoch_ms, price] point.

        Unlike the quotes endpoint, the price is a JSON number.
        """
        quote = synthesizer.quote(coin_id, api="coingecko")

        log_quote(
            logger,
            api="coingecko",
            key=coin_id,
            price_usd=quote.price_usd,
            known=coin_id in synthesizer.base_prices,
        )

        return MarketChartResponse(
            prices=[(quote.timestamp_millis, float(quote.price_usd))]
        )

    return router

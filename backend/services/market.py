import asyncio
import logging

from core.catalog import MARKET_PRICES
from core.config import settings

logger = logging.getLogger(__name__)


async def fetch_market_price(symbol: str) -> float | None:
    """Reference price for the symbol, or None when the table has no entry."""
    if settings.PRICE_LOOKUP_DELAY > 0:
        await asyncio.sleep(settings.PRICE_LOOKUP_DELAY)

    price = MARKET_PRICES.get(symbol)
    if price is None:
        logger.info("No reference price for %s, entry price left blank", symbol)
        return None
    return price


async def fetch_batch_prices(symbols: list[str]) -> dict[str, float]:
    """Look up several symbols concurrently, dropping the ones not found."""
    if not symbols:
        return {}

    prices = await asyncio.gather(*[fetch_market_price(s) for s in symbols])
    return {symbol: price for symbol, price in zip(symbols, prices) if price is not None}

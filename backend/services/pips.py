"""Pip size resolution and price <-> pip distance conversion."""

import math

from core.config import settings
from models.trade import CurrencyPair, TradeType

METAL_INDEX_MARKERS = ("XAU", "XAG", "NAS100", "US30")
FX_PIP_MULTIPLIER = 0.0001


def pip_multiplier(symbol: str) -> float:
    """Price change of one pip for the symbol. Resolved on every call."""
    if any(marker in symbol for marker in METAL_INDEX_MARKERS):
        return settings.METAL_INDEX_PIP_MULTIPLIER
    return FX_PIP_MULTIPLIER


def is_positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def pips_from_prices(
    entry: float | None,
    target: float | None,
    pair: CurrencyPair,
) -> float | None:
    """Distance between two prices in pips, or None if either price is unusable."""
    multiplier = pip_multiplier(pair.symbol)
    if not is_positive(entry) or not is_positive(target) or multiplier == 0:
        return None
    return abs(entry - target) / multiplier


def price_from_pips(
    entry: float | None,
    pips: float | None,
    pair: CurrencyPair,
    trade_type: TradeType,
    is_stop_loss: bool,
) -> float | None:
    """Price `pips` away from entry on the loss or profit side of the trade.

    Buy stop-losses and sell take-profits sit below entry; the other two sit
    above. Returns None when inputs are unusable or the price would be <= 0.
    """
    multiplier = pip_multiplier(pair.symbol)
    if not is_positive(entry) or multiplier == 0:
        return None
    if pips is None or not math.isfinite(pips) or pips < 0:
        return None

    price_change = pips * multiplier
    below_entry = is_stop_loss if trade_type == "buy" else not is_stop_loss
    price = entry - price_change if below_entry else entry + price_change

    if price <= 0:
        return None
    return price

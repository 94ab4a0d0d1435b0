"""Instrument lookup, autocomplete and fallback construction."""

import logging
import re

from core.catalog import ALL_CURRENCY_PAIRS
from core.errors import UnknownInstrumentError
from models.trade import CurrencyPair

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_SIZE = 100_000

# Checked in order, first substring match wins
_CONTRACT_SIZE_HINTS: tuple[tuple[str, float], ...] = (
    ("XAU", 100),
    ("XAG", 5000),
    ("XCU", 25000),
    ("NAS100", 20),
    ("US30", 10),
    ("BTC", 1),
    ("ETH", 1),
)

_CODE = re.compile(r"^[A-Z0-9]{2,10}$")


def _compact(symbol: str) -> str:
    return symbol.replace("/", "").replace(" ", "").upper()


def find_instrument(symbol: str) -> CurrencyPair | None:
    """Catalog entry for the symbol. "eurusd" and "EUR/USD" both match."""
    wanted = _compact(symbol)
    for pair in ALL_CURRENCY_PAIRS:
        if pair.symbol == symbol or _compact(pair.symbol) == wanted:
            return pair
    return None


def _split_symbol(symbol: str) -> tuple[str, str]:
    if "/" in symbol:
        base, _, quote = symbol.partition("/")
        base, quote = base.strip(), quote.strip()
    elif len(symbol) == 6 and symbol.isalpha():
        base, quote = symbol[:3], symbol[3:]
    else:
        raise UnknownInstrumentError(symbol)

    if not _CODE.match(base) or not _CODE.match(quote):
        raise UnknownInstrumentError(symbol)
    return base, quote


def guess_contract_size(symbol: str) -> float:
    for marker, size in _CONTRACT_SIZE_HINTS:
        if marker in symbol:
            return size
    return DEFAULT_CONTRACT_SIZE


def resolve_instrument(symbol: str) -> CurrencyPair:
    """Catalog instrument for the symbol, or a synthesized one.

    Synthesized instruments get a contract size guessed from the symbol.
    Raises UnknownInstrumentError when no base/quote can be read from it.
    """
    cleaned = symbol.strip().upper()
    pair = find_instrument(cleaned)
    if pair is not None:
        return pair

    base, quote = _split_symbol(cleaned)
    pair = CurrencyPair(
        symbol=f"{base}/{quote}",
        base=base,
        quote=quote,
        contract_size=guess_contract_size(cleaned),
    )
    logger.warning(
        "Unknown instrument %s, using %s with contract size %s",
        symbol, pair.symbol, pair.contract_size,
    )
    return pair


def suggest_symbols(query: str, limit: int | None = None) -> list[str]:
    """Catalog symbols containing `query`, case-insensitive."""
    needle = query.strip().lower()
    symbols = [p.symbol for p in ALL_CURRENCY_PAIRS if needle in p.symbol.lower()]
    return symbols[:limit] if limit else symbols

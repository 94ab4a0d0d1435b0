"""Instrument catalog, autocomplete and form option lists."""

from fastapi import APIRouter, HTTPException, Query

from core.catalog import ACCOUNT_CURRENCIES, CURRENCY_PAIRS, LEVERAGE_OPTIONS, TRADE_TYPES
from core.errors import UnknownInstrumentError
from models.trade import CurrencyPair
from services.instruments import resolve_instrument, suggest_symbols
from services.pips import pip_multiplier

router = APIRouter(prefix="/api/instruments", tags=["instruments"])


@router.get("")
def list_instruments() -> dict[str, list[CurrencyPair]]:
    return CURRENCY_PAIRS


@router.get("/search")
def search(
    q: str = Query("", max_length=20),
    limit: int = Query(10, ge=1, le=50),
) -> list[str]:
    return suggest_symbols(q, limit)


@router.get("/resolve")
def resolve(symbol: str = Query(..., min_length=1, max_length=20)) -> dict:
    try:
        pair = resolve_instrument(symbol)
    except UnknownInstrumentError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"instrument": pair, "pip_multiplier": pip_multiplier(pair.symbol)}


@router.get("/options")
def options() -> dict:
    return {
        "account_currencies": ACCOUNT_CURRENCIES,
        "leverage": LEVERAGE_OPTIONS,
        "trade_types": TRADE_TYPES,
    }

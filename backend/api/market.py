"""Reference price endpoints used to pre-fill the entry price."""

from fastapi import APIRouter, HTTPException, Query

from services.market import fetch_batch_prices, fetch_market_price

router = APIRouter(prefix="/api/market", tags=["market"])

MAX_SYMBOLS = 20


@router.get("/price")
async def get_price(symbol: str = Query(..., description="Instrument symbol, e.g. EUR/USD")) -> dict:
    price = await fetch_market_price(symbol.strip().upper())
    if price is None:
        raise HTTPException(status_code=404, detail=f"No reference price for {symbol}")
    return {"symbol": symbol.strip().upper(), "price": price}


@router.get("/prices")
async def get_prices(symbols: str = Query(..., description="Comma-separated symbols")) -> dict:
    """Return reference prices for up to 20 symbols; unknown ones are omitted."""
    symbol_list = [s.strip().upper() for s in symbols.split(",") if s.strip()]
    if not symbol_list:
        raise HTTPException(status_code=400, detail="symbols parameter is required")
    if len(symbol_list) > MAX_SYMBOLS:
        raise HTTPException(status_code=400, detail=f"Max {MAX_SYMBOLS} symbols per request")

    return await fetch_batch_prices(symbol_list)

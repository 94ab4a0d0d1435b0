from fastapi import APIRouter, HTTPException

from core.errors import StopLossTooTightError, UnknownInstrumentError
from models.trade import (
    CalculateRequest,
    CalculateResponse,
    CalculationInputs,
    PipRequest,
    PipResponse,
    PriceRequest,
    PriceResponse,
)
from services.calculator import calculate_lot_size, check_stop_loss_distance, risk_level
from services.instruments import resolve_instrument
from services.pips import pip_multiplier, pips_from_prices, price_from_pips

router = APIRouter(prefix="/api/trade", tags=["trade"])


def _pair_or_422(symbol: str):
    try:
        return resolve_instrument(symbol)
    except UnknownInstrumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest) -> CalculateResponse:
    pair = _pair_or_422(req.symbol)
    inputs = CalculationInputs(
        currency_pair=pair,
        **req.model_dump(exclude={"symbol"}),
    )

    try:
        check_stop_loss_distance(inputs)
    except StopLossTooTightError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    results = calculate_lot_size(inputs)
    return CalculateResponse(
        currency_pair=pair,
        results=results,
        risk_level=risk_level(results.effective_risk_percentage),
    )


@router.post("/pips", response_model=PipResponse)
def calculate_pips(req: PipRequest) -> PipResponse:
    pair = _pair_or_422(req.symbol)
    return PipResponse(
        pips=pips_from_prices(req.entry_price, req.target_price, pair),
        pip_multiplier=pip_multiplier(pair.symbol),
    )


@router.post("/price", response_model=PriceResponse)
def calculate_price(req: PriceRequest) -> PriceResponse:
    pair = _pair_or_422(req.symbol)
    price = price_from_pips(
        req.entry_price,
        req.pips,
        pair,
        req.trade_type,
        req.is_stop_loss,
    )
    return PriceResponse(price=price, pip_multiplier=pip_multiplier(pair.symbol))

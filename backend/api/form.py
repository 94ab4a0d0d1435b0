"""Interactive form endpoints: one in-process session driving the sync engine."""

import logging

from fastapi import APIRouter, HTTPException, Request

from core.errors import CalculatorError, IncompleteInputError, UnknownInstrumentError
from models.form import (
    AccountUpdate,
    EntryPriceUpdate,
    FormResponse,
    InstrumentUpdate,
    LegEdit,
    SavedCalculation,
    TradeTypeUpdate,
)
from services.calculator import risk_level
from services.history import HistoryStore
from services.session import FormSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/form", tags=["form"])

CLEARABLE_FIELDS = ("account_size", "risk_value")


def _session(request: Request) -> FormSession:
    return request.app.state.session


def _history(request: Request) -> HistoryStore:
    return request.app.state.history


def _response(session: FormSession) -> FormResponse:
    state = session.state
    return FormResponse(
        state=state,
        stop_loss_status=state.stop_loss.status,
        take_profit_status=state.take_profit.status,
        results=session.results(),
    )


@router.get("", response_model=FormResponse)
async def get_form(request: Request) -> FormResponse:
    return _response(_session(request))


@router.patch("/account", response_model=FormResponse)
async def update_account(body: AccountUpdate, request: Request) -> FormResponse:
    changes = {
        name: value
        for name, value in body.model_dump(exclude_unset=True).items()
        if value is not None or name in CLEARABLE_FIELDS
    }
    if not changes:
        raise HTTPException(status_code=400, detail="Nothing to update")

    session = _session(request)
    session.set_account(**changes)
    return _response(session)


@router.post("/entry-price", response_model=FormResponse)
async def set_entry_price(body: EntryPriceUpdate, request: Request) -> FormResponse:
    session = _session(request)
    session.set_entry_price(body.entry_price)
    return _response(session)


@router.post("/trade-type", response_model=FormResponse)
async def set_trade_type(body: TradeTypeUpdate, request: Request) -> FormResponse:
    session = _session(request)
    session.set_trade_type(body.trade_type)
    return _response(session)


@router.post("/instrument", response_model=FormResponse)
async def set_instrument(body: InstrumentUpdate, request: Request) -> FormResponse:
    """Switch instrument, then pre-fill entry price from the reference table."""
    session = _session(request)
    try:
        await session.select_instrument(body.symbol)
    except UnknownInstrumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _response(session)


@router.post("/stop-loss", response_model=FormResponse)
async def edit_stop_loss(body: LegEdit, request: Request) -> FormResponse:
    session = _session(request)
    session.edit_stop_loss(body.field, body.value)
    return _response(session)


@router.post("/take-profit", response_model=FormResponse)
async def edit_take_profit(body: LegEdit, request: Request) -> FormResponse:
    session = _session(request)
    session.edit_take_profit(body.field, body.value)
    return _response(session)


@router.post("/calculate", response_model=SavedCalculation)
async def calculate(request: Request) -> SavedCalculation:
    """Run the calculation and archive it in history when a lot size results."""
    session = _session(request)
    try:
        results = session.calculate()
    except IncompleteInputError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "missing": exc.missing},
        )
    except CalculatorError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    level = risk_level(results.effective_risk_percentage)
    entry = _history(request).record(session.state, results)
    if entry is None:
        return SavedCalculation(saved=False, results=results, risk_level=level)

    logger.info(
        "Saved %s %s lot %.2f",
        entry.inputs.currency_pair.symbol,
        entry.inputs.trade_type,
        results.final_lot_size,
    )
    return SavedCalculation(saved=True, id=entry.id, results=results, risk_level=level)

"""In-process form session: applies input events to one FormState."""

import logging
from collections.abc import Awaitable, Callable

from core.errors import IncompleteInputError
from models.form import FormState
from models.trade import CalculationInputs, CalculationResults, CurrencyPair, TradeType
from services import sync
from services.calculator import calculate_lot_size, check_stop_loss_distance
from services.instruments import resolve_instrument
from services.market import fetch_market_price
from services.pips import is_positive

logger = logging.getLogger(__name__)

PriceLookup = Callable[[str], Awaitable[float | None]]


def default_form_state() -> FormState:
    """EUR/USD buy at 1.0700, SL 1.0650 and TP 1.0800, both anchored on price."""
    state = FormState(entry_price=1.0700)
    return state.model_copy(update={
        "stop_loss": sync.edit_price(1.0650, state.context(is_stop_loss=True)),
        "take_profit": sync.edit_price(1.0800, state.context(is_stop_loss=False)),
    })


class FormSession:
    def __init__(
        self,
        state: FormState | None = None,
        price_lookup: PriceLookup = fetch_market_price,
    ):
        self.state = state if state is not None else default_form_state()
        self._price_lookup = price_lookup
        self._instrument_generation = 0

    # ── Events ─────────────────────────────────────────────────

    def set_account(self, **changes) -> FormState:
        """Account currency, size, leverage and risk settings. No resync needed."""
        self.state = self.state.model_copy(update=changes)
        return self.state

    def set_entry_price(self, value: float | None) -> FormState:
        self.state = self.state.model_copy(update={"entry_price": value})
        return self._resync()

    def set_trade_type(self, trade_type: TradeType) -> FormState:
        self.state = self.state.model_copy(update={"trade_type": trade_type})
        return self._resync()

    def change_instrument(self, symbol: str) -> CurrencyPair:
        """Hard reset: new instrument, blank entry price, both legs cleared."""
        pair = resolve_instrument(symbol)
        self._instrument_generation += 1
        self.state = self.state.model_copy(update={
            "currency_pair": pair,
            "entry_price": None,
            "stop_loss": sync.reset(),
            "take_profit": sync.reset(),
        })
        logger.info("Instrument changed to %s", pair.symbol)
        return pair

    async def autofill_entry_price(self) -> float | None:
        """Fill a blank entry price from the market lookup.

        The result is dropped if the instrument changed while the lookup was
        pending, or if an entry price was typed in the meantime.
        """
        generation = self._instrument_generation
        pair = self.state.currency_pair
        price = await self._price_lookup(pair.symbol)

        if generation != self._instrument_generation or self.state.currency_pair != pair:
            logger.debug("Discarding stale price for %s", pair.symbol)
            return None
        if price is None or self.state.entry_price is not None:
            return None

        self.set_entry_price(price)
        return price

    async def select_instrument(self, symbol: str) -> FormState:
        self.change_instrument(symbol)
        await self.autofill_entry_price()
        return self.state

    def edit_stop_loss(self, field: str, value: float | None) -> FormState:
        leg = sync.edit(field, value, self.state.context(is_stop_loss=True))
        self.state = self.state.model_copy(update={"stop_loss": leg})
        return self.state

    def edit_take_profit(self, field: str, value: float | None) -> FormState:
        leg = sync.edit(field, value, self.state.context(is_stop_loss=False))
        self.state = self.state.model_copy(update={"take_profit": leg})
        return self.state

    def _resync(self) -> FormState:
        state = self.state
        self.state = state.model_copy(update={
            "stop_loss": sync.resync(state.stop_loss, state.context(is_stop_loss=True)),
            "take_profit": sync.resync(state.take_profit, state.context(is_stop_loss=False)),
        })
        return self.state

    # ── Calculation ────────────────────────────────────────────

    def build_inputs(self) -> CalculationInputs | None:
        """Engine inputs from the current form, or None while fields are blank."""
        state = self.state
        if (
            state.account_size is None
            or state.risk_value is None
            or state.entry_price is None
            or state.stop_loss.effective_price is None
        ):
            return None
        return CalculationInputs(
            account_currency=state.account_currency,
            account_size=state.account_size,
            leverage=state.leverage,
            risk_type=state.risk_type,
            risk_value=state.risk_value,
            currency_pair=state.currency_pair,
            entry_price=state.entry_price,
            stop_loss_price=state.stop_loss.effective_price,
            take_profit_price=state.take_profit.effective_price,
            trade_type=state.trade_type,
        )

    def results(self) -> CalculationResults | None:
        inputs = self.build_inputs()
        if inputs is None:
            return None
        return calculate_lot_size(inputs)

    def calculate(self) -> CalculationResults:
        """Explicit calculation; raises instead of returning a zeroed result."""
        state = self.state
        required = {
            "account_size": state.account_size,
            "risk_value": state.risk_value,
            "entry_price": state.entry_price,
            "stop_loss_price": state.stop_loss.effective_price,
        }
        missing = [name for name, value in required.items() if not is_positive(value)]
        if missing:
            raise IncompleteInputError(missing)

        inputs = self.build_inputs()
        check_stop_loss_distance(inputs)
        return calculate_lot_size(inputs)

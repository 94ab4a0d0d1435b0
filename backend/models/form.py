from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from core.catalog import DEFAULT_PAIR
from models.trade import (
    AccountCurrency,
    CalculationResults,
    CurrencyPair,
    RiskLevel,
    RiskType,
    TradeType,
)

Anchor = Literal["price", "pips"]


class LegState(BaseModel):
    """Price/pips pair for one stop-loss or take-profit leg.

    `anchor` records which field the user set last; `effective_price` is the
    value handed to the lot size engine and always follows the anchor.
    """

    model_config = ConfigDict(frozen=True)

    price: float | None = None
    pips: float | None = None
    effective_price: float | None = None
    anchor: Anchor | None = None

    @property
    def status(self) -> str:
        if self.anchor == "price":
            return "anchored_on_price"
        if self.anchor == "pips":
            return "anchored_on_pips"
        return "uninitialized"


class SyncContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry_price: float | None
    currency_pair: CurrencyPair
    trade_type: TradeType
    is_stop_loss: bool


class FormState(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_currency: AccountCurrency = "USD"
    account_size: float | None = 10_000
    leverage: str = "1:500"
    risk_type: RiskType = "percentage"
    risk_value: float | None = 1
    currency_pair: CurrencyPair = DEFAULT_PAIR
    trade_type: TradeType = "buy"
    entry_price: float | None = None
    stop_loss: LegState = LegState()
    take_profit: LegState = LegState()

    def context(self, is_stop_loss: bool) -> SyncContext:
        return SyncContext(
            entry_price=self.entry_price,
            currency_pair=self.currency_pair,
            trade_type=self.trade_type,
            is_stop_loss=is_stop_loss,
        )


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    inputs: FormState
    results: CalculationResults


# ── API payloads ───────────────────────────────────────────────

class AccountUpdate(BaseModel):
    account_currency: AccountCurrency | None = None
    account_size: float | None = None
    leverage: str | None = Field(default=None, pattern=r"^1:[1-9]\d*$")
    risk_type: RiskType | None = None
    risk_value: float | None = None


class EntryPriceUpdate(BaseModel):
    entry_price: float | None = None


class TradeTypeUpdate(BaseModel):
    trade_type: TradeType


class InstrumentUpdate(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)


class LegEdit(BaseModel):
    field: Anchor
    value: float | None = None


class FormResponse(BaseModel):
    state: FormState
    stop_loss_status: str
    take_profit_status: str
    results: CalculationResults | None


class SavedCalculation(BaseModel):
    """Outcome of a form calculation. `id` names the history entry when saved."""

    saved: bool
    id: str | None = None
    results: CalculationResults
    risk_level: RiskLevel

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AccountCurrency = Literal["USD", "INR", "GBP", "EUR"]
RiskType = Literal["percentage", "amount"]
TradeType = Literal["buy", "sell"]
LotSizeCategory = Literal["standard", "mini", "micro"]
RiskLevel = Literal["low", "medium", "high"]

LEVERAGE_PATTERN = r"^1:\d+$"


class CurrencyPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1, max_length=20)
    base: str
    quote: str
    contract_size: float = Field(..., ge=0)  # units per standard lot


class CalculationInputs(BaseModel):
    """Everything the lot-size engine needs. Bad numbers are allowed here;
    the engine answers them with a zeroed result instead of an error."""

    model_config = ConfigDict(frozen=True)

    account_currency: AccountCurrency = "USD"
    account_size: float
    leverage: str = Field(default="1:500", pattern=LEVERAGE_PATTERN)
    risk_type: RiskType = "percentage"
    risk_value: float
    currency_pair: CurrencyPair
    entry_price: float
    stop_loss_price: float
    take_profit_price: float | None = None
    trade_type: TradeType = "buy"


class CalculationResults(BaseModel):
    final_lot_size: float
    total_risk_amount: float  # account currency
    risk_per_pip: float  # account currency
    stop_loss_pips: float
    take_profit_pips: float | None
    potential_profit_at_tp: float | None
    margin_required: float  # account currency
    risk_to_reward_ratio: float | None
    lot_size_category: LotSizeCategory
    effective_risk_percentage: float


# ── API payloads ───────────────────────────────────────────────

class CalculateRequest(BaseModel):
    account_currency: AccountCurrency = "USD"
    account_size: float = Field(..., gt=0)
    leverage: str = Field(default="1:500", pattern=r"^1:[1-9]\d*$")
    risk_type: RiskType = "percentage"
    risk_value: float = Field(..., gt=0)
    symbol: str = Field(..., min_length=1, max_length=20)
    entry_price: float = Field(..., gt=0)
    stop_loss_price: float = Field(..., gt=0)
    take_profit_price: float | None = Field(default=None, gt=0)
    trade_type: TradeType = "buy"


class CalculateResponse(BaseModel):
    currency_pair: CurrencyPair
    results: CalculationResults
    risk_level: RiskLevel


class PipRequest(BaseModel):
    symbol: str
    entry_price: float = Field(..., gt=0)
    target_price: float = Field(..., gt=0)


class PipResponse(BaseModel):
    pips: float | None
    pip_multiplier: float


class PriceRequest(BaseModel):
    symbol: str
    entry_price: float = Field(..., gt=0)
    pips: float = Field(..., ge=0)
    trade_type: TradeType = "buy"
    is_stop_loss: bool = True


class PriceResponse(BaseModel):
    price: float | None
    pip_multiplier: float

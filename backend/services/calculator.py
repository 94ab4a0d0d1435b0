"""Lot size engine: risk amount, pip value, lot size, margin and R:R."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from core.catalog import EXCHANGE_RATES_TO_USD, RISK_LOW_MAX, RISK_MEDIUM_MAX
from core.errors import StopLossTooTightError
from models.trade import (
    AccountCurrency,
    CalculationInputs,
    CalculationResults,
    CurrencyPair,
    LotSizeCategory,
    RiskLevel,
)
from services.pips import pip_multiplier, pips_from_prices

logger = logging.getLogger(__name__)

MIN_LOT_SIZE = 0.01
MIN_STOP_LOSS_PIPS = 0.5
LOT_STEP = Decimal("0.01")
USD_LIKE = ("USD", "USDT")


def exchange_rate_to_usd(currency: str) -> float:
    """USD value of one unit of `currency`. Unknown currencies count as 1.0."""
    rate = EXCHANGE_RATES_TO_USD.get(currency)
    if not rate:
        logger.warning("Missing exchange rate for %s, assuming 1.0", currency)
        return 1.0
    return rate


def convert_currency(amount: float, from_currency: str, to_currency: str) -> float:
    if from_currency == to_currency:
        return amount
    amount_usd = amount * exchange_rate_to_usd(from_currency)
    return amount_usd / exchange_rate_to_usd(to_currency)


def pip_value_per_standard_lot(pair: CurrencyPair, account_currency: str) -> float:
    """Value of one pip on one standard lot, in the account currency.

    EUR/USD: 0.0001 * 100,000 = 10 USD. USD/JPY: 0.0001 * 100,000 = 10 JPY,
    then converted through the USD rate table.
    """
    pip_value_quote = pip_multiplier(pair.symbol) * pair.contract_size
    return convert_currency(pip_value_quote, pair.quote, account_currency)


def leverage_ratio(leverage: str) -> float:
    return float(leverage.split(":")[1])


def position_value_usd(lot_size: float, pair: CurrencyPair, entry_price: float) -> float:
    units = lot_size * pair.contract_size
    if pair.quote in USD_LIKE:
        # EUR/USD, XAU/USD, BTC/USDT: notional is priced in USD already
        return units * entry_price
    if pair.base in USD_LIKE:
        return units
    # Cross pair: value the base leg alone through its USD rate
    return units * exchange_rate_to_usd(pair.base)


def calculate_margin_required(
    lot_size: float,
    leverage: str,
    pair: CurrencyPair,
    entry_price: float,
    account_currency: AccountCurrency,
) -> float:
    """Margin in account currency. A 1:0 leverage cannot open the trade: inf."""
    ratio = leverage_ratio(leverage)
    if ratio == 0:
        return math.inf
    margin_usd = position_value_usd(lot_size, pair, entry_price) / ratio
    return convert_currency(margin_usd, "USD", account_currency)


def round_lot_size(lots: float) -> float:
    """Two decimals, exact halves rounded up (0.125 -> 0.13)."""
    if not math.isfinite(lots):
        return lots
    return float(Decimal(repr(lots)).quantize(LOT_STEP, rounding=ROUND_HALF_UP))


def lot_size_category(lot_size: float) -> LotSizeCategory:
    if lot_size >= 1.0:
        return "standard"
    if lot_size >= 0.1:
        return "mini"
    return "micro"


def risk_level(effective_risk_percentage: float) -> RiskLevel:
    if effective_risk_percentage <= RISK_LOW_MAX:
        return "low"
    if effective_risk_percentage <= RISK_MEDIUM_MAX:
        return "medium"
    return "high"


def _zero_results(
    total_risk_amount: float = 0.0,
    effective_risk_percentage: float = 0.0,
) -> CalculationResults:
    return CalculationResults(
        final_lot_size=0.0,
        total_risk_amount=total_risk_amount,
        risk_per_pip=0.0,
        stop_loss_pips=0.0,
        take_profit_pips=None,
        potential_profit_at_tp=None,
        margin_required=0.0,
        risk_to_reward_ratio=None,
        lot_size_category="micro",
        effective_risk_percentage=effective_risk_percentage,
    )


def _or_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def _or_none(value: float | None) -> float | None:
    if value is None or math.isnan(value):
        return None
    return value


def calculate_lot_size(inputs: CalculationInputs) -> CalculationResults:
    """Size a trade so that hitting the stop loses the chosen risk amount.

    Never raises for bad numbers: non-positive account size, risk value,
    entry or stop-loss yields an all-zero result with category "micro".
    """
    pair = inputs.currency_pair
    if (
        inputs.account_size <= 0
        or inputs.risk_value <= 0
        or inputs.entry_price <= 0
        or inputs.stop_loss_price <= 0
    ):
        return _zero_results()

    if inputs.risk_type == "percentage":
        total_risk_amount = inputs.account_size * inputs.risk_value / 100
    else:
        total_risk_amount = inputs.risk_value
    requested_risk_pct = total_risk_amount / inputs.account_size * 100

    stop_loss_pips = pips_from_prices(inputs.entry_price, inputs.stop_loss_price, pair) or 0.0
    if stop_loss_pips == 0:
        return _zero_results(total_risk_amount, requested_risk_pct)

    pip_value = pip_value_per_standard_lot(pair, inputs.account_currency)
    if not pip_value > 0 or not math.isfinite(pip_value):
        logger.warning("Pip value for %s is %s, cannot size trade", pair.symbol, pip_value)
        return _zero_results(total_risk_amount, requested_risk_pct)

    recommended = total_risk_amount / (stop_loss_pips * pip_value)
    final_lot_size = max(MIN_LOT_SIZE, round_lot_size(recommended))

    actual_risk_amount = final_lot_size * stop_loss_pips * pip_value
    effective_risk_percentage = actual_risk_amount / inputs.account_size * 100
    risk_per_pip = final_lot_size * pip_value

    take_profit_pips: float | None = None
    potential_profit: float | None = None
    reward_ratio: float | None = None
    if inputs.take_profit_price is not None and inputs.take_profit_price > 0:
        take_profit_pips = pips_from_prices(inputs.entry_price, inputs.take_profit_price, pair) or 0.0
        potential_profit = final_lot_size * take_profit_pips * pip_value
        reward_ratio = take_profit_pips / stop_loss_pips

    margin = calculate_margin_required(
        final_lot_size,
        inputs.leverage,
        pair,
        inputs.entry_price,
        inputs.account_currency,
    )

    return CalculationResults(
        final_lot_size=_or_zero(final_lot_size),
        total_risk_amount=_or_zero(actual_risk_amount),
        risk_per_pip=_or_zero(risk_per_pip),
        stop_loss_pips=_or_zero(stop_loss_pips),
        take_profit_pips=_or_none(take_profit_pips),
        potential_profit_at_tp=_or_none(potential_profit),
        margin_required=_or_zero(margin),
        risk_to_reward_ratio=_or_none(reward_ratio),
        lot_size_category=lot_size_category(final_lot_size),
        effective_risk_percentage=_or_zero(effective_risk_percentage),
    )


def check_stop_loss_distance(inputs: CalculationInputs) -> float:
    """Return the stop-loss distance in pips, raising if it is under half a pip."""
    stop_loss_pips = pips_from_prices(
        inputs.entry_price, inputs.stop_loss_price, inputs.currency_pair
    )
    if stop_loss_pips is not None and stop_loss_pips < MIN_STOP_LOSS_PIPS:
        raise StopLossTooTightError(stop_loss_pips)
    return stop_loss_pips or 0.0

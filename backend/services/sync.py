"""Price <-> pips synchronisation for stop-loss and take-profit legs.

Each leg is a small state machine: uninitialized, anchored on price or
anchored on pips. Whatever the user typed last is the anchor; the other
field is always derived from it. Transitions are pure and return a new
LegState.
"""

from models.form import LegState, SyncContext
from services.pips import pips_from_prices, price_from_pips


def reset() -> LegState:
    return LegState()


def edit_price(value: float | None, ctx: SyncContext) -> LegState:
    """User typed a price: it becomes the anchor and the effective price."""
    if value is None:
        return reset()
    return LegState(
        price=value,
        pips=pips_from_prices(ctx.entry_price, value, ctx.currency_pair),
        effective_price=value,
        anchor="price",
    )


def edit_pips(value: float | None, ctx: SyncContext) -> LegState:
    """User typed a pip distance: price and effective price derive from it."""
    if value is None:
        return reset()
    price = price_from_pips(
        ctx.entry_price,
        value,
        ctx.currency_pair,
        ctx.trade_type,
        ctx.is_stop_loss,
    )
    return LegState(price=price, pips=value, effective_price=price, anchor="pips")


def resync(leg: LegState, ctx: SyncContext) -> LegState:
    """Re-derive the non-anchor field after entry, direction or instrument moved."""
    if leg.anchor == "price" and leg.price is not None:
        return edit_price(leg.price, ctx)
    if leg.anchor == "pips" and leg.pips is not None:
        return edit_pips(leg.pips, ctx)
    return reset()


def edit(leg_field: str, value: float | None, ctx: SyncContext) -> LegState:
    match leg_field:
        case "price":
            return edit_price(value, ctx)
        case "pips":
            return edit_pips(value, ctx)
    raise ValueError(f"Unknown leg field: {leg_field}")

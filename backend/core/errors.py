"""Error kinds raised by the calculator services.

Routers translate these into HTTP 4xx responses. None of them is fatal:
the engine itself never raises for bad numbers, it returns a zeroed result.
"""


class CalculatorError(Exception):
    """Base class for recoverable calculator errors."""


class IncompleteInputError(CalculatorError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing or non-positive fields: " + ", ".join(missing)
        )


class StopLossTooTightError(CalculatorError):
    """Stop-loss sits on (or within half a pip of) the entry price."""

    def __init__(self, stop_loss_pips: float):
        self.stop_loss_pips = stop_loss_pips
        super().__init__(
            f"Stop loss is {stop_loss_pips:.2f} pips from entry. "
            "Move it at least 0.5 pips away to size the trade."
        )


class UnknownInstrumentError(CalculatorError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Cannot derive base/quote currencies from '{symbol}'")

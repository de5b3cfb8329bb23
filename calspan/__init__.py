from .duration import NONE, Duration
from .errors import (
    AmountOutOfRange,
    DivisionByZero,
    DurationError,
    IncompatibleUnits,
    InvalidQuantity,
    NegativeResult,
)
from .interval import Interval
from .units import TimeUnit

__all__ = [
    "Duration",
    "NONE",
    "TimeUnit",
    "Interval",
    "DurationError",
    "InvalidQuantity",
    "IncompatibleUnits",
    "NegativeResult",
    "DivisionByZero",
    "AmountOutOfRange",
]

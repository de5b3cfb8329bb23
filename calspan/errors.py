"""calspan exception hierarchy.

All calspan-specific exceptions inherit from DurationError. Each one also
inherits the builtin exception a caller would naturally catch for it, so
``except ValueError`` keeps working around duration arithmetic.
"""


class DurationError(Exception):
    """Base exception for all calspan errors."""


class InvalidQuantity(DurationError, ValueError):
    """A duration was constructed with a negative quantity."""


class IncompatibleUnits(DurationError, ValueError):
    """Two durations from different base-unit groups were combined.

    Examples:
        - Adding a month to a day
        - Comparing milliseconds with years
    """


class NegativeResult(DurationError, ValueError):
    """Subtraction would produce a negative duration."""


class DivisionByZero(DurationError, ZeroDivisionError):
    """A duration was divided by a zero-length duration."""


class AmountOutOfRange(DurationError, OverflowError):
    """A calendar field amount does not fit a signed 32-bit integer."""


__all__ = [
    "DurationError",
    "InvalidQuantity",
    "IncompatibleUnits",
    "NegativeResult",
    "DivisionByZero",
    "AmountOutOfRange",
]

"""Duration: an immutable (quantity, unit) value.

Durations combine only within a base-unit group: anything measured in
milliseconds with anything measured in milliseconds, anything measured in
months with anything measured in months. Applying a duration to a time point
or a calendar date dispatches on the same split. Fixed-length units shift the
epoch-millisecond value directly, calendar-variable units are added as a month
field through python-dateutil's relativedelta.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta, timezone
from fractions import Fraction
from typing import ClassVar, TypeVar, overload
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from calspan import util
from calspan.errors import (
    AmountOutOfRange,
    DivisionByZero,
    DurationError,
    IncompatibleUnits,
    InvalidQuantity,
    NegativeResult,
)
from calspan.interval import Interval
from calspan.units import TimeUnit

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)

Calendar = TypeVar("Calendar", date, datetime)


@dataclass(frozen=True, kw_only=True, eq=False)
class Duration:
    """A non-negative amount of time in a single unit.

    Examples:
        >>> Duration.days(1) + Duration.hours(3)
        Duration(quantity=97200000, unit=TimeUnit.MILLISECOND)

        >>> str(Duration.minutes(90))
        '1 hour, 30 minutes'

        >>> Duration.days(1) + Duration.months(1)
        Traceback (most recent call last):
        ...
        calspan.errors.IncompatibleUnits: 1 month is not convertible to 1 day.
        ...
    """

    quantity: int
    unit: TimeUnit

    NONE: ClassVar["Duration"]

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise TypeError(
                f"Duration quantity must be an int, got "
                f"{type(self.quantity).__name__!r}: {self.quantity!r}"
            )
        if not isinstance(self.unit, TimeUnit):
            raise TypeError(
                f"Duration unit must be a TimeUnit, got "
                f"{type(self.unit).__name__!r}: {self.unit!r}"
            )
        if self.quantity < 0:
            raise InvalidQuantity(
                f"Quantity ({self.quantity}) must be zero or positive.\n"
                f"Hint: Durations have no direction; use subtracted_from() "
                f"to move backwards in time"
            )

    # Construction

    @classmethod
    def of(cls, quantity: int, unit: TimeUnit) -> "Duration":
        return cls(quantity=quantity, unit=unit)

    @classmethod
    def milliseconds(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.MILLISECOND)

    @classmethod
    def seconds(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.SECOND)

    @classmethod
    def minutes(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.MINUTE)

    @classmethod
    def hours(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.HOUR)

    @classmethod
    def days(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.DAY)

    @classmethod
    def weeks(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.WEEK)

    @classmethod
    def months(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.MONTH)

    @classmethod
    def quarters(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.QUARTER)

    @classmethod
    def years(cls, how_many: int) -> "Duration":
        return cls.of(how_many, TimeUnit.YEAR)

    @classmethod
    def days_hours_minutes_seconds_milliseconds(
        cls, days: int, hours: int, minutes: int, seconds: int, milliseconds: int
    ) -> "Duration":
        """Build one duration from clock-style components.

        The result stays in days when every other component is zero and is
        expressed in milliseconds otherwise.

        Example:
            >>> Duration.days_hours_minutes_seconds_milliseconds(1, 2, 30, 0, 0)
            Duration(quantity=95400000, unit=TimeUnit.MILLISECOND)
        """
        result = cls.days(days)
        for component in (
            cls.hours(hours),
            cls.minutes(minutes),
            cls.seconds(seconds),
            cls.milliseconds(milliseconds),
        ):
            if component.quantity != 0:
                result = result.plus(component)
        return result

    # Conversion

    def in_base_units(self) -> int:
        """Quantity expressed in the unit's base unit (milliseconds or months)."""
        return self.quantity * self.unit.factor

    def is_convertible_to(self, other: "Duration") -> bool:
        return self.unit.is_convertible_to(other.unit)

    def _check_convertible(self, other: "Duration") -> None:
        if not other.unit.is_convertible_to(self.unit):
            raise IncompatibleUnits(
                f"{other} is not convertible to {self}.\n"
                f"Hint: {self.unit.plural} are counted in "
                f"{self.unit.base_unit.plural}, {other.unit.plural} in "
                f"{other.unit.base_unit.plural}; the two never mix"
            )

    # Arithmetic

    def plus(self, other: "Duration") -> "Duration":
        self._check_convertible(other)
        return Duration(
            quantity=self.in_base_units() + other.in_base_units(),
            unit=self.unit.base_unit,
        )

    def minus(self, other: "Duration") -> "Duration":
        self._check_convertible(other)
        if self.in_base_units() < other.in_base_units():
            raise NegativeResult(
                f"Cannot subtract {other} from {self}: the result would be "
                f"negative"
            )
        return Duration(
            quantity=self.in_base_units() - other.in_base_units(),
            unit=self.unit.base_unit,
        )

    def divided_by(self, divisor: "Duration") -> Fraction:
        """Exact ratio of this duration to ``divisor``."""
        self._check_convertible(divisor)
        if divisor.in_base_units() == 0:
            raise DivisionByZero(f"Cannot divide {self} by a zero duration")
        return Fraction(self.in_base_units(), divisor.in_base_units())

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minus(other)

    def __truediv__(self, other: object) -> Fraction:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.divided_by(other)

    # Comparison

    def compare(self, other: "Duration") -> int:
        """Return -1, 0 or 1 as this duration is shorter, equal or longer."""
        self._check_convertible(other)
        difference = self.in_base_units() - other.in_base_units()
        return (difference > 0) - (difference < 0)

    def is_equal_to(self, other: "Duration") -> bool:
        # Zero is the same amount of nothing in either group
        if self.in_base_units() == 0 and other.in_base_units() == 0:
            return True
        return self.compare(other) == 0

    def is_greater_than(self, other: "Duration") -> bool:
        return self.compare(other) > 0

    def is_less_than(self, other: "Duration") -> bool:
        return self.compare(other) < 0

    def is_greater_than_or_equal_to(self, other: "Duration") -> bool:
        return self.compare(other) >= 0

    def is_less_than_or_equal_to(self, other: "Duration") -> bool:
        return self.compare(other) <= 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.is_less_than_or_equal_to(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.is_greater_than_or_equal_to(other)

    @override
    def __eq__(self, other: object) -> bool:
        """Equal when both measure the same amount in the same group.

        Unlike compare(), durations from different groups are simply unequal
        here so they can live together in sets and dicts.
        """
        if not isinstance(other, Duration):
            return NotImplemented
        if self.in_base_units() == 0 and other.in_base_units() == 0:
            return True
        if not self.is_convertible_to(other):
            return False
        return self.in_base_units() == other.in_base_units()

    @override
    def __hash__(self) -> int:
        base = self.in_base_units()
        if base == 0:
            return hash(0)
        return hash((self.unit.base_unit, base))

    # Normalization and rendering

    def normalized_unit(self) -> TimeUnit:
        """Coarsest unit of this duration's group that represents it exactly.

        Example:
            >>> Duration.hours(48).normalized_unit()
            TimeUnit.DAY
        """
        base = self.in_base_units()
        for unit in self.unit.descending_units():
            if base % unit.factor == 0:
                return unit
        raise DurationError(
            f"No unit evenly divides {base} {self.unit.base_unit.plural}"
        )

    def to_normalized_string(self) -> str:
        """Render using every unit of the group, weeks and quarters included."""
        return self._decompose(self.unit.descending_units())

    @override
    def __str__(self) -> str:
        return self._decompose(self.unit.descending_units_for_display())

    def _decompose(self, units: tuple[TimeUnit, ...]) -> str:
        remainder = self.in_base_units()
        if remainder == 0:
            return units[-1].to_string(0)
        parts: list[str] = []
        for unit in units:
            portion, remainder = divmod(remainder, unit.factor)
            if portion > 0:
                parts.append(unit.to_string(portion))
        return ", ".join(parts)

    # Application to time points and calendar dates

    @overload
    def added_to(
        self, point: datetime, *, tz: str | ZoneInfo = ...
    ) -> datetime: ...

    @overload
    def added_to(self, point: date, *, tz: str | ZoneInfo = ...) -> date: ...

    @overload
    def added_to(self, point: int, *, tz: str | ZoneInfo = ...) -> int: ...

    def added_to(
        self, point: datetime | date | int, *, tz: str | ZoneInfo = util.REFERENCE_TZ
    ) -> datetime | date | int:
        """Move ``point`` forward by this duration.

        Args:
            point: A timezone-aware datetime, a date, or epoch milliseconds
            tz: Zone whose calendar months, quarters and years are counted in
                when shifting a time point (default UTC)

        Returns:
            A value of the same kind as ``point``

        Raises:
            TypeError: If point is a naive datetime or an unsupported type
            AmountOutOfRange: If a calendar amount exceeds 32 bits
        """
        return self._apply(point, 1, tz)

    @overload
    def subtracted_from(
        self, point: datetime, *, tz: str | ZoneInfo = ...
    ) -> datetime: ...

    @overload
    def subtracted_from(self, point: date, *, tz: str | ZoneInfo = ...) -> date: ...

    @overload
    def subtracted_from(self, point: int, *, tz: str | ZoneInfo = ...) -> int: ...

    def subtracted_from(
        self, point: datetime | date | int, *, tz: str | ZoneInfo = util.REFERENCE_TZ
    ) -> datetime | date | int:
        """Move ``point`` backward by this duration. See added_to()."""
        return self._apply(point, -1, tz)

    def starting_from(self, start: datetime | date | int) -> Interval:
        return Interval(start=start, end=self.added_to(start))

    def preceding(self, end: datetime | date | int) -> Interval:
        return Interval(start=self.subtracted_from(end), end=end)

    def _apply(
        self, point: datetime | date | int, sign: int, tz: str | ZoneInfo
    ) -> datetime | date | int:
        if isinstance(point, datetime):
            return self._apply_to_datetime(point, sign, tz)
        if isinstance(point, date):
            return self._apply_to_date(point, sign)
        if isinstance(point, int) and not isinstance(point, bool):
            return self._apply_to_epoch_millis(point, sign, tz)
        raise TypeError(
            f"Duration can only be applied to a datetime, date, or int.\n"
            f"Got {type(point).__name__!r}: {point!r}\n"
            f"Examples:\n"
            f"  Duration.days(1).added_to(datetime(2025,1,1,tzinfo=timezone.utc))\n"
            f"  Duration.months(1).added_to(date(2025,1,31))\n"
            f"  Duration.hours(1).added_to(1735689600000)  # epoch milliseconds"
        )

    def _apply_to_datetime(
        self, point: datetime, sign: int, tz: str | ZoneInfo
    ) -> datetime:
        if point.tzinfo is None:
            raise TypeError(
                f"Duration can only be applied to a timezone-aware datetime.\n"
                f"Got naive datetime: {point!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc."
            )
        amount = sign * self.in_base_units()
        if self.unit.is_convertible_to_milliseconds():
            with self._calendar_range(point):
                shifted = point.astimezone(timezone.utc) + amount * _ONE_MILLISECOND
        else:
            shifted = self._add_months(point.astimezone(util.zone(tz)), amount)
        # Through UTC, so a wall time inside a DST gap resolves to a real one
        with self._calendar_range(point):
            return shifted.astimezone(timezone.utc).astimezone(point.tzinfo)

    def _apply_to_epoch_millis(
        self, millis: int, sign: int, tz: str | ZoneInfo
    ) -> int:
        amount = sign * self.in_base_units()
        if self.unit.is_convertible_to_milliseconds():
            return millis + amount
        with self._calendar_range(millis):
            calendar = (_EPOCH + millis * _ONE_MILLISECOND).astimezone(util.zone(tz))
        shifted = self._add_months(calendar, amount)
        return (shifted - _EPOCH) // _ONE_MILLISECOND

    def _apply_to_date(self, day: date, sign: int) -> date:
        # Only days and larger units move a date
        if self.unit < TimeUnit.DAY:
            logger.debug("%s is finer than a day, leaving %s unchanged", self, day)
            return day
        if self.unit is TimeUnit.DAY:
            amount = sign * self.quantity
            _check_field_amount(amount)
            with self._calendar_range(day):
                return day + relativedelta(days=amount)
        amount = sign * self.in_base_units()
        if self.unit.is_convertible_to_milliseconds():
            with self._calendar_range(day):
                midnight = datetime.combine(day, time.min, tzinfo=timezone.utc)
                return (midnight + amount * _ONE_MILLISECOND).date()
        return self._add_months(day, amount)

    def _add_months(self, calendar: Calendar, amount: int) -> Calendar:
        _check_field_amount(amount)
        logger.debug("Adding %d months to %s for %s", amount, calendar, self)
        with self._calendar_range(calendar):
            return calendar + relativedelta(months=amount)

    @contextmanager
    def _calendar_range(self, start: date | int) -> Iterator[None]:
        """Report results outside datetime's year range as AmountOutOfRange."""
        try:
            yield
        except (OverflowError, ValueError) as error:
            raise AmountOutOfRange(
                f"{self} moves {start} outside the supported calendar range.\n"
                f"Hint: dates and datetimes run from year {MINYEAR} to {MAXYEAR}"
            ) from error


def _check_field_amount(amount: int) -> None:
    if not util.INT32_MIN <= amount <= util.INT32_MAX:
        raise AmountOutOfRange(
            f"Calendar amount {amount} is out of range.\n"
            f"Calendar fields accept {util.INT32_MIN} to {util.INT32_MAX}"
        )


NONE: Duration = Duration.milliseconds(0)
Duration.NONE = NONE

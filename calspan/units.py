"""TimeUnit enumeration: the closed catalog of duration units.

Units fall into two groups that never mix. Fixed-length units (millisecond
through week) are anchored on the millisecond; calendar-variable units (month,
quarter, year) are anchored on the month because their real length depends on
where in the calendar they are applied.
"""

from enum import Enum

from typing_extensions import override

from calspan import util


class TimeUnit(Enum):
    """Units a Duration can be expressed in.

    Members are declared from finest to coarsest, and that declaration order is
    the unit ordering: ``TimeUnit.WEEK < TimeUnit.MONTH`` holds even though the
    two are not convertible.

    Examples:
        >>> TimeUnit.HOUR.factor
        3600000

        >>> TimeUnit.QUARTER.base_unit
        TimeUnit.MONTH

        >>> TimeUnit.DAY.is_convertible_to(TimeUnit.YEAR)
        False
    """

    # (singular name, factor to base unit, calendar-variable, shown by default)
    MILLISECOND = ("millisecond", util.MILLISECOND, False, True)
    SECOND = ("second", util.SECOND, False, True)
    MINUTE = ("minute", util.MINUTE, False, True)
    HOUR = ("hour", util.HOUR, False, True)
    DAY = ("day", util.DAY, False, True)
    WEEK = ("week", util.WEEK, False, False)
    MONTH = ("month", util.MONTH, True, True)
    QUARTER = ("quarter", util.QUARTER, True, False)
    YEAR = ("year", util.YEAR, True, True)

    def __init__(
        self, singular: str, factor: int, calendar_variable: bool, display: bool
    ) -> None:
        self.singular: str = singular
        self.plural: str = singular + "s"
        self.factor: int = factor
        self.calendar_variable: bool = calendar_variable
        self.display: bool = display

    @property
    def base_unit(self) -> "TimeUnit":
        """The unit this unit's factor is expressed in."""
        return TimeUnit.MONTH if self.calendar_variable else TimeUnit.MILLISECOND

    @property
    def _rank(self) -> int:
        return _RANKS[self]

    def is_convertible_to(self, other: "TimeUnit") -> bool:
        return self.base_unit is other.base_unit

    def is_convertible_to_milliseconds(self) -> bool:
        return self.base_unit is TimeUnit.MILLISECOND

    def descending_units(self) -> tuple["TimeUnit", ...]:
        """All units of this unit's group, coarsest first."""
        return _DESCENDING[self.base_unit]

    def descending_units_for_display(self) -> tuple["TimeUnit", ...]:
        """Like descending_units(), minus units hidden from default rendering."""
        return tuple(u for u in self.descending_units() if u.display)

    def next_finer_unit(self) -> "TimeUnit | None":
        """The next finer unit of the same group, None for a base unit."""
        units = self.descending_units()
        index = units.index(self)
        if index == len(units) - 1:
            return None
        return units[index + 1]

    def to_string(self, quantity: int) -> str:
        name = self.singular if quantity == 1 else self.plural
        return f"{quantity} {name}"

    def __lt__(self, other: "TimeUnit") -> bool:
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self._rank < other._rank

    def __le__(self, other: "TimeUnit") -> bool:
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self._rank <= other._rank

    def __gt__(self, other: "TimeUnit") -> bool:
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self._rank > other._rank

    def __ge__(self, other: "TimeUnit") -> bool:
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self._rank >= other._rank

    @override
    def __str__(self) -> str:
        return self.singular

    @override
    def __repr__(self) -> str:
        return f"TimeUnit.{self.name}"


_RANKS: dict[TimeUnit, int] = {unit: rank for rank, unit in enumerate(TimeUnit)}

_DESCENDING: dict[TimeUnit, tuple[TimeUnit, ...]] = {
    base: tuple(
        sorted(
            (unit for unit in TimeUnit if unit.base_unit is base),
            key=lambda unit: unit.factor,
            reverse=True,
        )
    )
    for base in (TimeUnit.MILLISECOND, TimeUnit.MONTH)
}


__all__ = ["TimeUnit"]

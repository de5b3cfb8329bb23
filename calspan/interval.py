from dataclasses import dataclass
from datetime import date
from typing import Generic, TypeVar

# datetime is a subclass of date, so this covers time points too
Point = TypeVar("Point", date, int)


@dataclass(frozen=True, kw_only=True)
class Interval(Generic[Point]):
    start: Point
    end: Point

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval start ({self.start}) must be <= end ({self.end})"
            )

    def __str__(self) -> str:
        """Human-friendly string showing the range."""
        return f"Interval({self.start}→{self.end})"

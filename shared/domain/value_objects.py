"""
Common Value Objects

- DateRange: Represents a closed range of calendar dates (a hotel stay)
- InvalidDateRange: Raised when a range is malformed or not allowed
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from shared.domain.base import ValueObject


class InvalidDateRange(ValueError):
    """Raised when a requested date range is invalid."""


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date to end_date, both inclusive.
    A stay from the 10th to the 20th occupies 11 calendar days, and a
    single-day range (start_date == end_date) is a valid window.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise InvalidDateRange(
                f"Start date ({self.start_date}) must not be after end date ({self.end_date})"
            )

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Both ends are inclusive, so ranges touching on a single day overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> True (shared day)
            - DateRange(25, 28) overlaps with DateRange(29, 31) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (self.start_date <= other.end_date and
                self.end_date >= other.start_date)

    def days(self) -> Iterator[date]:
        """Iterate over every calendar day of the range in ascending order"""
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += timedelta(days=1)

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"

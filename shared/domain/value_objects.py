"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a half-open range of dates [start, end)
"""

from dataclasses import dataclass
from datetime import date, datetime

from shared.domain.exceptions import InvalidRange


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a range from start (inclusive) to end (exclusive).
    Used for booking periods and room availability windows.
    """
    start: date
    end: date

    def __post_init__(self):
        # datetime is a date subclass but compares badly with plain dates
        for bound in (self.start, self.end):
            if not isinstance(bound, date) or isinstance(bound, datetime):
                raise InvalidRange(f"Range bounds must be dates, got {bound!r}")
        if self.start >= self.end:
            raise InvalidRange(
                f"Start ({self.start}) must be before end ({self.end}); range is [start, end)"
            )

    def contains(self, other: 'DateRange') -> bool:
        """
        Check if another range lies entirely inside this one

        Every range contains itself.
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check containment of another DateRange")
        return self.start <= other.start and self.end >= other.end

    def overlaps(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share any day.
        Note: end is exclusive, so adjacent ranges don't overlap.

        Examples:
            - [25, 28) overlaps with [27, 30) -> True
            - [25, 28) overlaps with [28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # Overlap formula: start1 < end2 AND end1 > start2
        return self.start < other.end and self.end > other.start

    def __len__(self):
        """Number of days in the range"""
        return (self.end - self.start).days

    def __str__(self):
        return f"[{self.start} to {self.end})"

    def __repr__(self):
        return f"DateRange({self.start}, {self.end})"

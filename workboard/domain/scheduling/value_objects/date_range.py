"""
Date Range Value Object

Represents the calendar span of a work order. Ranges are half-open,
``[start_date, end_date)``, and must cover at least one day.
"""

from datetime import date, datetime

from pydantic import model_validator
from typing_extensions import Self

from workboard.domain.shared.base import ValueObject


class DateRange(ValueObject):
    """A half-open calendar date interval."""

    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _end_after_start(self) -> Self:
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    def overlaps_with(self, other: "DateRange") -> bool:
        """
        Check if this range shares any instant with another range.

        Touching ranges (one ends the day the other starts) do not overlap.
        """
        return overlaps(self.start_date, self.end_date, other.start_date, other.end_date)

    def __str__(self) -> str:
        return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"


def overlaps(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Two half-open intervals overlap iff ``start_a < end_b and end_a > start_b``."""
    return start_a < end_b and end_a > start_b


def coerce_date(value: date | datetime | str) -> date:
    """
    Normalize a calendar value to a plain date.

    Datetimes lose their time of day; strings must be ISO dates or ISO
    timestamps.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")

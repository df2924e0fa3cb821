"""
Timeline Value Objects

Immutable results of projecting the calendar onto the board's horizontal
pixel axis. None of these hold references to the schedule; they are derived
geometry and can be discarded and recomputed at will.
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from .enums import ZoomLevel


@dataclass(frozen=True)
class TimelineConfig:
    """Column widths, window sizes and bar limits for the projector."""

    day_column_width: float = 80
    week_column_width: float = 120
    month_column_width: float = 150
    day_buffer_days: int = 14
    week_buffer_weeks: int = 4
    month_buffer_months: int = 6
    min_bar_width: float = 100
    week_start_day: int = 6  # datetime.weekday(); 6 = Sunday

    def __post_init__(self):
        if not (0 <= self.week_start_day <= 6):
            raise ValueError(
                f"week_start_day must be between 0 and 6, got {self.week_start_day}"
            )
        for name in ("day_column_width", "week_column_width", "month_column_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.min_bar_width < 0:
            raise ValueError("min_bar_width cannot be negative")
        for name in ("day_buffer_days", "week_buffer_weeks", "month_buffer_months"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")

    def column_width(self, zoom_level: ZoomLevel) -> float:
        widths = {
            ZoomLevel.DAY: self.day_column_width,
            ZoomLevel.WEEK: self.week_column_width,
            ZoomLevel.MONTH: self.month_column_width,
        }
        return widths[zoom_level]


@dataclass(frozen=True)
class TimelineBucket:
    """One column of the timeline header."""

    start: date
    label: str
    width: float


@dataclass(frozen=True)
class TimelineAxis:
    """
    The calendar-to-pixel mapping for one zoom level and reference date.

    ``axis_start`` and ``axis_end`` are the calendar bounds used for exact
    interpolation; ``today_offset`` is the coarse bucket-index position of
    today and intentionally does not come from that interpolation.
    """

    zoom_level: ZoomLevel
    today: date
    axis_start: date
    axis_end: date
    buckets: tuple[TimelineBucket, ...]
    total_width: float
    today_offset: float

    @property
    def start_moment(self) -> datetime:
        return datetime.combine(self.axis_start, time.min)

    @property
    def end_moment(self) -> datetime:
        return datetime.combine(self.axis_end, time.min)

    @property
    def span_seconds(self) -> float:
        return (self.end_moment - self.start_moment).total_seconds()

    @property
    def bucket_count(self) -> int:
        return len(self.buckets)


@dataclass(frozen=True)
class BarGeometry:
    """Horizontal placement of a work order bar, in pixels."""

    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class CreatePrefill:
    """What a click on empty row space hands to the creation form."""

    work_center_id: str
    start_date: date
    clicked_at: datetime

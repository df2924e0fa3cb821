"""
Timeline Projector

Pure coordinate mapping between calendar time and horizontal pixels. The
projector builds the visible axis for a zoom level, places work order bars
on it and turns clicks back into dates. It knows nothing about the schedule
store; callers hand it the orders to place.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Protocol

from ..value_objects.date_range import coerce_date
from ..value_objects.enums import ZoomLevel
from ..value_objects.timeline import (
    BarGeometry,
    CreatePrefill,
    TimelineAxis,
    TimelineBucket,
    TimelineConfig,
)


class DatedSpan(Protocol):
    """Anything with a start and end date: work orders and date ranges."""

    start_date: date
    end_date: date


def _add_months(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day``'s month."""
    year, month_index = divmod(day.year * 12 + day.month - 1 + months, 12)
    return date(year, month_index + 1, 1)


def _month_difference(later: date, earlier: date) -> int:
    return (later.year - earlier.year) * 12 + later.month - earlier.month


def _short_date(day: date) -> str:
    return f"{day.month}/{day.day}"


class TimelineProjector:
    """
    Maps dates to pixel offsets and back for the board's timeline.

    Two positions are produced and they are not the same thing: the axis's
    ``today_offset`` counts whole buckets elapsed, while ``date_to_pixel``
    interpolates exactly between the axis bounds. The marker and the bars
    can therefore disagree by up to a bucket near the edges of the window.
    """

    def __init__(self, config: TimelineConfig | None = None):
        self.config = config or TimelineConfig()

    def compute_axis(self, zoom_level: ZoomLevel, today: date | datetime) -> TimelineAxis:
        """
        Build the visible window and its header columns around today.

        Args:
            zoom_level: Day, week or month columns
            today: Reference date; a datetime is reduced to its calendar date

        Returns:
            The axis with buckets, total width and coarse today offset
        """
        zoom_level = ZoomLevel(zoom_level)
        today = coerce_date(today)
        width = self.config.column_width(zoom_level)

        if zoom_level is ZoomLevel.DAY:
            axis_start, axis_end = self._day_window(today)
            buckets = self._day_buckets(axis_start, axis_end, width)
            elapsed = (today - axis_start).days
        elif zoom_level is ZoomLevel.WEEK:
            axis_start, axis_end = self._week_window(today)
            buckets = self._week_buckets(axis_start, axis_end, width)
            elapsed = (today - axis_start).days // 7
        else:
            axis_start, axis_end = self._month_window(today)
            buckets = self._month_buckets(axis_start, axis_end, width)
            elapsed = _month_difference(today, axis_start)

        total_width = sum(bucket.width for bucket in buckets)
        today_offset = elapsed / len(buckets) * total_width if buckets else 0.0

        return TimelineAxis(
            zoom_level=zoom_level,
            today=today,
            axis_start=axis_start,
            axis_end=axis_end,
            buckets=buckets,
            total_width=total_width,
            today_offset=today_offset,
        )

    def date_to_pixel(self, axis: TimelineAxis, moment: date | datetime) -> float:
        """Exact pixel position of a moment, clamped to the axis."""
        if not isinstance(moment, datetime):
            moment = datetime.combine(moment, time.min)
        elapsed = (moment - axis.start_moment).total_seconds()
        position = elapsed / axis.span_seconds * axis.total_width
        return min(max(position, 0.0), axis.total_width)

    def pixel_to_date(self, axis: TimelineAxis, offset: float) -> datetime:
        """
        Moment at a pixel offset; offsets outside the axis extrapolate.

        Raises:
            ValueError: If the offset is not finite or maps outside the
                representable datetime range
        """
        if not math.isfinite(offset):
            raise ValueError(f"Pixel offset must be finite, got {offset}")
        seconds = offset / axis.total_width * axis.span_seconds
        try:
            return axis.start_moment + timedelta(seconds=seconds)
        except OverflowError as e:
            raise ValueError(f"Pixel offset {offset} is outside the datetime range") from e

    def bar_geometry(self, axis: TimelineAxis, span: DatedSpan) -> BarGeometry:
        """
        Place a bar for a work order (or any dated span) on the axis.

        The left edge is clamped into the axis. Short bars are widened to
        the minimum bar width, then any bar running past the right edge is
        cut back to end there.

        Args:
            axis: Axis to place the bar on
            span: Object exposing ``start_date`` and ``end_date``

        Returns:
            Left offset and width in pixels
        """
        left = self.date_to_pixel(axis, span.start_date)
        duration = (span.end_date - span.start_date).total_seconds()
        width = max(duration / axis.span_seconds * axis.total_width, self.config.min_bar_width)
        if left + width > axis.total_width:
            width = axis.total_width - left
        return BarGeometry(left=left, width=width)

    def click_to_create(
        self, axis: TimelineAxis, work_center_id: str, offset: float
    ) -> CreatePrefill:
        """Turn a click on a work center row into a creation prefill."""
        clicked_at = self.pixel_to_date(axis, offset)
        return CreatePrefill(
            work_center_id=work_center_id,
            start_date=clicked_at.date(),
            clicked_at=clicked_at,
        )

    def scroll_offset_for_today(self, axis: TimelineAxis, viewport_width: float) -> float:
        """Scroll position that centers the today marker in the viewport."""
        return max(0.0, axis.today_offset - viewport_width / 2)

    # Windows

    def _day_window(self, today: date) -> tuple[date, date]:
        buffer = timedelta(days=self.config.day_buffer_days)
        return today - buffer, today + buffer

    def _week_window(self, today: date) -> tuple[date, date]:
        buffer = timedelta(weeks=self.config.week_buffer_weeks)
        week_start = self.config.week_start_day
        week_end = (week_start + 6) % 7

        start = today - buffer
        start -= timedelta(days=(start.weekday() - week_start) % 7)
        end = today + buffer
        end += timedelta(days=(week_end - end.weekday()) % 7)
        return start, end

    def _month_window(self, today: date) -> tuple[date, date]:
        months = self.config.month_buffer_months
        start = _add_months(today, -months)
        end = _add_months(today, months + 1) - timedelta(days=1)
        return start, end

    # Buckets

    @staticmethod
    def _day_buckets(start: date, end: date, width: float) -> tuple[TimelineBucket, ...]:
        buckets = []
        current = start
        while current <= end:
            buckets.append(TimelineBucket(start=current, label=_short_date(current), width=width))
            current += timedelta(days=1)
        return tuple(buckets)

    @staticmethod
    def _week_buckets(start: date, end: date, width: float) -> tuple[TimelineBucket, ...]:
        buckets = []
        current = start
        while current <= end:
            label = f"{_short_date(current)} - {_short_date(current + timedelta(days=6))}"
            buckets.append(TimelineBucket(start=current, label=label, width=width))
            current += timedelta(days=7)
        return tuple(buckets)

    @staticmethod
    def _month_buckets(start: date, end: date, width: float) -> tuple[TimelineBucket, ...]:
        buckets = []
        current = start
        while current <= end:
            label = f"{current.month}/{current.year}"
            buckets.append(TimelineBucket(start=current, label=label, width=width))
            current = _add_months(current, 1)
        return tuple(buckets)

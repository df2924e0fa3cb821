"""Value objects for the scheduling domain."""

from .date_range import DateRange, coerce_date, overlaps
from .enums import WorkOrderStatus, ZoomLevel
from .timeline import (
    BarGeometry,
    CreatePrefill,
    TimelineAxis,
    TimelineBucket,
    TimelineConfig,
)

__all__ = [
    "BarGeometry",
    "CreatePrefill",
    "DateRange",
    "TimelineAxis",
    "TimelineBucket",
    "TimelineConfig",
    "WorkOrderStatus",
    "ZoomLevel",
    "coerce_date",
    "overlaps",
]

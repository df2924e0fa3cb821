"""
Domain Services

Stateless scheduling logic that spans entities and value objects: field
validation for work orders, overlap detection per work center, and the
calendar-to-pixel projection of the timeline.
"""

from .overlap import find_conflict, find_overlapping_pairs
from .timeline_projector import TimelineProjector
from .work_order_validation import ValidatedWorkOrder, ValidationResult, validate

__all__ = [
    "TimelineProjector",
    "ValidatedWorkOrder",
    "ValidationResult",
    "find_conflict",
    "find_overlapping_pairs",
    "validate",
]

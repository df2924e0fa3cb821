"""
Application services for the scheduling board.

The schedule store owns the collections and persists them; the panel and
board sit on top of it and of the timeline projector.
"""

from .schedule_store import MutationResult, ScheduleStore
from .timeline_board import BarView, BoardRow, TimelineBoard, status_label
from .work_order_panel import PanelOutcome, WorkOrderDraft, WorkOrderPanel

__all__ = [
    "BarView",
    "BoardRow",
    "MutationResult",
    "PanelOutcome",
    "ScheduleStore",
    "TimelineBoard",
    "WorkOrderDraft",
    "WorkOrderPanel",
    "status_label",
]

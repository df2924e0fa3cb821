"""Domain enums for the scheduling board."""

from enum import Enum


class WorkOrderStatus(str, Enum):
    """Work order status enumeration."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    BLOCKED = "blocked"

    @property
    def label(self) -> str:
        """Human-readable label shown on bars and in the status picker."""
        labels = {
            WorkOrderStatus.OPEN: "Open",
            WorkOrderStatus.IN_PROGRESS: "In Progress",
            WorkOrderStatus.COMPLETE: "Complete",
            WorkOrderStatus.BLOCKED: "Blocked",
        }
        return labels[self]

    @property
    def css_class(self) -> str:
        return f"status-{self.value}"


class ZoomLevel(str, Enum):
    """Timeline zoom level enumeration."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

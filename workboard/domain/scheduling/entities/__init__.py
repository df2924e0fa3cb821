"""Entities for the scheduling domain."""

from .work_center import WorkCenter
from .work_order import WorkOrder, generate_work_order_id

__all__ = ["WorkCenter", "WorkOrder", "generate_work_order_id"]

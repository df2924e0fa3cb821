"""
Work order form panel.

Holds the create/edit draft logic of the slide-out panel without any widget
code: it prepares drafts, submits them through the schedule store and turns
the store's result into something the panel can display.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel

from workboard.domain.scheduling.entities.work_order import WorkOrder
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus
from workboard.domain.scheduling.value_objects.timeline import CreatePrefill

from .schedule_store import ScheduleStore


class WorkOrderDraft(BaseModel):
    """Editable form state; only validated when submitted."""

    order_id: str | None = None
    work_center_id: str = ""
    name: str = ""
    status: WorkOrderStatus | str = WorkOrderStatus.OPEN
    start_date: date | None = None
    end_date: date | None = None

    @property
    def is_edit(self) -> bool:
        return self.order_id is not None

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude={"order_id"})


@dataclass(frozen=True)
class PanelOutcome:
    """Result of a submit: whether it saved and what to show next to the form."""

    saved: bool
    message: str
    work_order: WorkOrder | None = None


class WorkOrderPanel:
    """Create and edit flows for a single work order."""

    def __init__(self, store: ScheduleStore, default_duration_days: int = 7):
        self._store = store
        self.default_duration_days = default_duration_days

    def open_for_create(self, prefill: CreatePrefill) -> WorkOrderDraft:
        """Start a new order at the clicked date, lasting the default duration."""
        return WorkOrderDraft(
            work_center_id=prefill.work_center_id,
            status=WorkOrderStatus.OPEN,
            start_date=prefill.start_date,
            end_date=prefill.start_date + timedelta(days=self.default_duration_days),
        )

    def open_for_edit(self, order: WorkOrder) -> WorkOrderDraft:
        return WorkOrderDraft(
            order_id=order.id,
            work_center_id=order.work_center_id,
            name=order.name,
            status=order.status,
            start_date=order.start_date,
            end_date=order.end_date,
        )

    def submit(self, draft: WorkOrderDraft) -> PanelOutcome:
        """
        Save the draft through the store.

        Args:
            draft: Form state to create from, or to apply to ``draft.order_id``

        Returns:
            Outcome with the saved order, or the store's error message
        """
        if draft.is_edit:
            result = self._store.update_work_order(draft.order_id, draft.to_fields())
        else:
            result = self._store.create_work_order(draft.to_fields())

        if not result.success:
            return PanelOutcome(saved=False, message=result.message)
        return PanelOutcome(saved=True, message="", work_order=result.value)

    @property
    def status_options(self) -> tuple[tuple[str, str], ...]:
        """(value, label) pairs for the status picker."""
        return tuple((status.value, status.label) for status in WorkOrderStatus)

    @property
    def work_center_options(self) -> tuple[tuple[str, str], ...]:
        """(id, name) pairs for the work center picker."""
        return tuple((wc.id, wc.name) for wc in self._store.list_work_centers())

"""Work order entity for date-ranged tasks on a work center."""

import time
from datetime import date
from uuid import uuid4

from pydantic import Field, model_validator
from typing_extensions import Self

from workboard.domain.shared.base import Entity

from ..value_objects.date_range import DateRange
from ..value_objects.enums import WorkOrderStatus


def generate_work_order_id() -> str:
    """
    Generate a work order identifier.

    Millisecond timestamp plus nine random hex characters: unique within a
    process and practically unique across restarts.
    """
    return f"wo_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class WorkOrder(Entity):
    """
    A scheduled task on one work center.

    Instances are immutable; the schedule store replaces a record with a new
    instance carrying the same ``id`` once an update has been validated.
    """

    work_center_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    status: WorkOrderStatus = WorkOrderStatus.OPEN
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _end_after_start(self) -> Self:
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self

    @property
    def date_range(self) -> DateRange:
        return DateRange(start_date=self.start_date, end_date=self.end_date)

    @property
    def duration_days(self) -> int:
        return self.date_range.duration_days

    @staticmethod
    def create(
        work_center_id: str,
        name: str,
        start_date: date,
        end_date: date,
        status: WorkOrderStatus = WorkOrderStatus.OPEN,
        order_id: str | None = None,
    ) -> "WorkOrder":
        """Factory method to create a work order with a fresh identifier."""
        return WorkOrder(
            id=order_id or generate_work_order_id(),
            work_center_id=work_center_id,
            name=name,
            status=status,
            start_date=start_date,
            end_date=end_date,
        )

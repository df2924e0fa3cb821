"""
Timeline board view model.

Joins the schedule store and the timeline projector: one row per work center,
one positioned bar per work order, plus the zoom, click-to-create,
scroll-to-today and delete interactions of the board.
"""

from dataclasses import dataclass
from datetime import date, datetime

from workboard.core.observability import get_logger
from workboard.domain.scheduling.entities.work_center import WorkCenter
from workboard.domain.scheduling.entities.work_order import WorkOrder
from workboard.domain.scheduling.services.timeline_projector import TimelineProjector
from workboard.domain.scheduling.value_objects.date_range import coerce_date
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus, ZoomLevel
from workboard.domain.scheduling.value_objects.timeline import (
    BarGeometry,
    CreatePrefill,
    TimelineAxis,
)

from .schedule_store import ScheduleStore

logger = get_logger(__name__)


def status_label(status: WorkOrderStatus | str) -> str:
    """Display label for a work order status."""
    return WorkOrderStatus(status).label


@dataclass(frozen=True)
class BarView:
    order: WorkOrder
    geometry: BarGeometry
    status_label: str
    css_class: str


@dataclass(frozen=True)
class BoardRow:
    work_center: WorkCenter
    bars: tuple[BarView, ...]


class TimelineBoard:
    """
    Board state for one viewer.

    The board subscribes to both store collections on construction and keeps
    the latest snapshots, so ``rows()`` always reflects the last committed
    mutation. Call ``close()`` to detach from the store.
    """

    def __init__(
        self,
        store: ScheduleStore,
        projector: TimelineProjector,
        today: date | datetime,
        zoom: ZoomLevel = ZoomLevel.DAY,
    ):
        self._store = store
        self._projector = projector
        self._today = coerce_date(today)
        self._work_centers: tuple[WorkCenter, ...] = ()
        self._work_orders: tuple[WorkOrder, ...] = ()
        self._axis = projector.compute_axis(zoom, self._today)
        self._unsubscribers = [
            store.subscribe_work_centers(self._on_work_centers),
            store.subscribe_work_orders(self._on_work_orders),
        ]

    @property
    def zoom(self) -> ZoomLevel:
        return self._axis.zoom_level

    @property
    def today(self) -> date:
        return self._today

    @property
    def axis(self) -> TimelineAxis:
        return self._axis

    def set_zoom(self, level: ZoomLevel | str) -> TimelineAxis:
        """Switch zoom level and rebuild the axis around today."""
        self._axis = self._projector.compute_axis(ZoomLevel(level), self._today)
        logger.debug("board_zoom_changed", zoom=self._axis.zoom_level.value)
        return self._axis

    def rows(self) -> tuple[BoardRow, ...]:
        """One row per work center, each with its orders placed on the axis."""
        return tuple(
            BoardRow(
                work_center=work_center,
                bars=tuple(
                    BarView(
                        order=order,
                        geometry=self._projector.bar_geometry(self._axis, order),
                        status_label=status_label(order.status),
                        css_class=WorkOrderStatus(order.status).css_class,
                    )
                    for order in self._work_orders
                    if order.work_center_id == work_center.id
                ),
            )
            for work_center in self._work_centers
        )

    def click(self, work_center_id: str, offset: float) -> CreatePrefill:
        """Translate a click on empty row space into a creation prefill."""
        return self._projector.click_to_create(self._axis, work_center_id, offset)

    def delete(self, order_id: str) -> None:
        self._store.delete_work_order(order_id)

    def scroll_offset(self, viewport_width: float) -> float:
        return self._projector.scroll_offset_for_today(self._axis, viewport_width)

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _on_work_centers(self, work_centers: tuple[WorkCenter, ...]) -> None:
        self._work_centers = work_centers

    def _on_work_orders(self, work_orders: tuple[WorkOrder, ...]) -> None:
        self._work_orders = work_orders

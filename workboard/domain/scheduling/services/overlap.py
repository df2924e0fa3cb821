"""
Overlap rules for work centers.

A work center runs one order at a time: no two orders assigned to the same
work center may share any instant of their half-open ``[start, end)`` ranges.
"""

from collections.abc import Iterable
from datetime import date

from ..entities.work_order import WorkOrder
from ..value_objects.date_range import overlaps


def find_conflict(
    orders: Iterable[WorkOrder],
    work_center_id: str,
    start_date: date,
    end_date: date,
    exclude_id: str | None = None,
) -> WorkOrder | None:
    """
    Find the first order on a work center whose range overlaps the given one.

    Args:
        orders: Orders to check against
        work_center_id: Work center the candidate range is scheduled on
        start_date: Candidate range start (inclusive)
        end_date: Candidate range end (exclusive)
        exclude_id: Order to skip, used when an order is revalidated against
            the rest of the schedule during its own update

    Returns:
        The conflicting order, or None
    """
    for order in orders:
        if order.work_center_id != work_center_id:
            continue
        if exclude_id is not None and order.id == exclude_id:
            continue
        if overlaps(start_date, end_date, order.start_date, order.end_date):
            return order
    return None


def find_overlapping_pairs(
    orders: Iterable[WorkOrder],
) -> list[tuple[WorkOrder, WorkOrder]]:
    """
    List every pair of orders that are double-booked on a work center.

    Used to vet collections that did not pass through the mutation boundary,
    such as persisted state read back at startup.
    """
    by_center: dict[str, list[WorkOrder]] = {}
    for order in orders:
        by_center.setdefault(order.work_center_id, []).append(order)

    conflicts = []
    for center_orders in by_center.values():
        sorted_orders = sorted(center_orders, key=lambda o: o.start_date)
        for i, current in enumerate(sorted_orders):
            for later in sorted_orders[i + 1 :]:
                if not later.date_range.overlaps_with(current.date_range):
                    break
                conflicts.append((current, later))
    return conflicts

"""
Bundled default dataset.

Used whenever storage holds nothing usable. Order dates are relative to the
supplied "today" so a fresh board always shows work around the current date.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from workboard.domain.scheduling.entities.work_center import WorkCenter
from workboard.domain.scheduling.entities.work_order import WorkOrder
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus


@dataclass(frozen=True)
class SeedData:
    """Initial work centers and work orders for an empty board."""

    work_centers: tuple[WorkCenter, ...]
    work_orders: tuple[WorkOrder, ...]


SAMPLE_WORK_CENTERS = (
    ("wc_001", "Extrusion Line A"),
    ("wc_002", "CNC Machine 1"),
    ("wc_003", "Assembly Station"),
    ("wc_004", "Quality Control"),
    ("wc_005", "Packaging Line"),
)

# (id, name, work center, status, start offset, end offset) in days from today
SAMPLE_WORK_ORDERS = (
    ("wo_001", "Plastic Profile Batch #1234", "wc_001", WorkOrderStatus.COMPLETE, -10, -5),
    ("wo_002", "Aluminum Extrusion #5678", "wc_001", WorkOrderStatus.IN_PROGRESS, -3, 4),
    ("wo_003", "Steel Rod Production", "wc_001", WorkOrderStatus.OPEN, 5, 12),
    ("wo_004", "Precision Machining Job A", "wc_002", WorkOrderStatus.COMPLETE, -7, -2),
    ("wo_005", "Custom Component Fabrication", "wc_002", WorkOrderStatus.BLOCKED, 0, 7),
    ("wo_006", "Product Assembly Unit 1", "wc_003", WorkOrderStatus.IN_PROGRESS, -5, 5),
    ("wo_007", "Product Assembly Unit 2", "wc_003", WorkOrderStatus.OPEN, 5, 12),
    ("wo_008", "Quality Inspection Batch 1", "wc_004", WorkOrderStatus.COMPLETE, -8, -4),
    ("wo_009", "Quality Inspection Batch 2", "wc_004", WorkOrderStatus.IN_PROGRESS, -1, 6),
    ("wo_010", "Final Packaging Order #100", "wc_005", WorkOrderStatus.OPEN, 1, 8),
)


def build_sample_data(today: date) -> SeedData:
    """Build the default dataset with order dates anchored on ``today``."""
    work_centers = tuple(
        WorkCenter(id=center_id, name=name) for center_id, name in SAMPLE_WORK_CENTERS
    )
    work_orders = tuple(
        WorkOrder(
            id=order_id,
            name=name,
            work_center_id=center_id,
            status=status,
            start_date=today + timedelta(days=start_offset),
            end_date=today + timedelta(days=end_offset),
        )
        for order_id, name, center_id, status, start_offset, end_offset in SAMPLE_WORK_ORDERS
    )
    return SeedData(work_centers=work_centers, work_orders=work_orders)

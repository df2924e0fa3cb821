"""
Shared fixtures for the scheduling board tests.

Every test gets its own in-memory storage and store, anchored on a fixed
"today" so that seed dates and axis windows are deterministic.
"""

from datetime import date

import pytest

from workboard.application.services.schedule_store import ScheduleStore
from workboard.domain.scheduling.entities.work_center import WorkCenter
from workboard.domain.scheduling.services.timeline_projector import TimelineProjector
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus
from workboard.infrastructure.persistence.key_value_stores import InMemoryKeyValueStorage
from workboard.infrastructure.persistence.sample_data import SeedData

from .factories import TODAY, make_order


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    """Fresh in-memory storage for each test."""
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(storage: InMemoryKeyValueStorage, today: date) -> ScheduleStore:
    """Store seeded with the bundled sample data."""
    return ScheduleStore(storage, today=today)


@pytest.fixture
def small_seed() -> SeedData:
    """Two work centers; wc_001 holds one completed order from day -10 to day -5."""
    return SeedData(
        work_centers=(
            WorkCenter(id="wc_001", name="Extrusion Line A"),
            WorkCenter(id="wc_002", name="CNC Machine 1"),
        ),
        work_orders=(make_order("wo_001", "wc_001", -10, -5, WorkOrderStatus.COMPLETE),),
    )


@pytest.fixture
def small_store(storage: InMemoryKeyValueStorage, small_seed: SeedData) -> ScheduleStore:
    return ScheduleStore(storage, seed=small_seed)


@pytest.fixture
def projector() -> TimelineProjector:
    return TimelineProjector()

"""
Composition root.

Builds explicitly wired store, projector, panel and board instances from
``Settings``. Nothing in the domain or application layers reads settings or
holds module-level singletons; everything flows from here.
"""

from dataclasses import dataclass
from datetime import date

from workboard.application.services.schedule_store import ScheduleStore
from workboard.application.services.timeline_board import TimelineBoard
from workboard.application.services.work_order_panel import WorkOrderPanel
from workboard.core.config import Settings, get_settings
from workboard.core.observability import get_logger, setup_logging
from workboard.domain.scheduling.repositories.key_value_storage import KeyValueStorage
from workboard.domain.scheduling.services.timeline_projector import TimelineProjector
from workboard.domain.scheduling.value_objects.enums import ZoomLevel
from workboard.infrastructure.persistence.key_value_stores import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
)

logger = get_logger(__name__)


@dataclass
class Workboard:
    """Everything a front end needs to drive one board."""

    settings: Settings
    store: ScheduleStore
    projector: TimelineProjector
    panel: WorkOrderPanel
    board: TimelineBoard


def create_storage(settings: Settings) -> KeyValueStorage:
    """Get the storage backend selected by ``STORAGE_BACKEND``."""
    if settings.STORAGE_BACKEND == "file":
        return JsonFileKeyValueStorage(settings.STORAGE_DIR)
    return InMemoryKeyValueStorage()


def create_projector(settings: Settings | None = None) -> TimelineProjector:
    settings = settings or get_settings()
    return TimelineProjector(settings.timeline_config)


def create_store(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    today: date | None = None,
) -> ScheduleStore:
    """Get a schedule store with storage keys from settings."""
    settings = settings or get_settings()
    return ScheduleStore(
        storage if storage is not None else create_storage(settings),
        work_orders_key=settings.WORK_ORDERS_STORAGE_KEY,
        work_centers_key=settings.WORK_CENTERS_STORAGE_KEY,
        today=today,
    )


def create_panel(store: ScheduleStore, settings: Settings | None = None) -> WorkOrderPanel:
    settings = settings or get_settings()
    return WorkOrderPanel(store, default_duration_days=settings.DEFAULT_ORDER_DURATION_DAYS)


def create_board(
    settings: Settings | None = None,
    store: ScheduleStore | None = None,
    today: date | None = None,
    zoom: ZoomLevel = ZoomLevel.DAY,
) -> TimelineBoard:
    """Get a timeline board wired to a store and a projector built from settings."""
    settings = settings or get_settings()
    today = today or date.today()
    store = store or create_store(settings, today=today)
    return TimelineBoard(store, create_projector(settings), today, zoom)


def create_workboard(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    today: date | None = None,
) -> Workboard:
    """
    Configure logging and wire a complete board.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        storage: Storage override; defaults to the configured backend
        today: Reference date for seed data and the timeline

    Returns:
        The wired store, projector, panel and board
    """
    settings = settings or get_settings()
    setup_logging(settings)

    today = today or date.today()
    store = create_store(settings, storage=storage, today=today)
    projector = create_projector(settings)
    board = TimelineBoard(store, projector, today)

    logger.info(
        "workboard_started",
        environment=settings.ENVIRONMENT,
        storage_backend=settings.STORAGE_BACKEND,
        work_centers=len(store.list_work_centers()),
        work_orders=len(store.list_work_orders()),
    )
    return Workboard(
        settings=settings,
        store=store,
        projector=projector,
        panel=create_panel(store, settings),
        board=board,
    )

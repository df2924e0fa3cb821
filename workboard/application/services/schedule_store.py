"""
Schedule store for the work-order board.

The store exclusively owns the work-order and work-center collections. It
validates every mutation, enforces the one-order-at-a-time rule per work
center, publishes the full updated collection to subscribers and mirrors it
into key-value storage. Expected failures come back as results; storage
failures are logged and swallowed, leaving memory as the source of truth.
"""

from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any, TypeVar

import pydantic

from workboard.core.observability import get_logger
from workboard.domain.scheduling.entities.work_center import WorkCenter
from workboard.domain.scheduling.entities.work_order import WorkOrder
from workboard.domain.scheduling.events.snapshot_publisher import SnapshotPublisher
from workboard.domain.scheduling.repositories.key_value_storage import KeyValueStorage
from workboard.domain.scheduling.services.overlap import (
    find_conflict,
    find_overlapping_pairs,
)
from workboard.domain.scheduling.services.work_order_validation import (
    normalize_field_names,
    validate,
)
from workboard.domain.scheduling.value_objects.date_range import coerce_date
from workboard.domain.shared.exceptions import (
    DomainError,
    NotFoundError,
    OverlapError,
)
from workboard.domain.shared.result import Result
from workboard.infrastructure.persistence.document_mapper import DocumentMapper
from workboard.infrastructure.persistence.sample_data import SeedData, build_sample_data

logger = get_logger(__name__)

MutationResult = Result[WorkOrder, DomainError]

WORK_ORDERS_KEY = "workOrders"
WORK_CENTERS_KEY = "workCenters"

# Fields that identify a record rather than describe it; never merged on update.
_IDENTITY_FIELDS = frozenset({"id", "docId", "doc_id", "docType", "doc_type"})

T = TypeVar("T")


class ScheduleStore:
    """
    Authoritative, in-memory schedule mirrored to key-value storage.

    Construct one per board; tests construct one per test with an in-memory
    storage so state never leaks between them.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        work_orders_key: str = WORK_ORDERS_KEY,
        work_centers_key: str = WORK_CENTERS_KEY,
        seed: SeedData | None = None,
        today: date | None = None,
    ) -> None:
        """
        Initialize the store from storage, falling back to seed data.

        Args:
            storage: Key-value persistence collaborator
            work_orders_key: Storage key for the work-order collection
            work_centers_key: Storage key for the work-center collection
            seed: Dataset used when storage holds nothing usable; defaults to
                the bundled sample data anchored on ``today``
            today: Reference date for the bundled sample data
        """
        self._storage = storage
        self._work_orders_key = work_orders_key
        self._work_centers_key = work_centers_key
        self._seed = seed or build_sample_data(today or date.today())

        work_centers = self._load_collection(
            work_centers_key,
            DocumentMapper.work_centers_from_json,
            self._seed.work_centers,
        )
        work_orders = self._load_collection(
            work_orders_key,
            self._load_work_orders,
            self._seed.work_orders,
        )

        self._work_centers: SnapshotPublisher[WorkCenter] = SnapshotPublisher(
            "work_centers", work_centers
        )
        self._work_orders: SnapshotPublisher[WorkOrder] = SnapshotPublisher(
            "work_orders", work_orders
        )

        self._save(self._work_centers_key, DocumentMapper.work_centers_to_json(work_centers))
        self._save(self._work_orders_key, DocumentMapper.work_orders_to_json(work_orders))

    # Queries

    def list_work_centers(self) -> tuple[WorkCenter, ...]:
        return self._work_centers.current

    def get_work_center(self, work_center_id: str) -> WorkCenter | None:
        return next(
            (wc for wc in self._work_centers.current if wc.id == work_center_id), None
        )

    def list_work_orders(self) -> tuple[WorkOrder, ...]:
        return self._work_orders.current

    def get_work_order(self, order_id: str) -> WorkOrder | None:
        return next((wo for wo in self._work_orders.current if wo.id == order_id), None)

    def orders_for_center(self, work_center_id: str) -> tuple[WorkOrder, ...]:
        """Orders on a work center in collection order (not sorted by date)."""
        return tuple(
            wo for wo in self._work_orders.current if wo.work_center_id == work_center_id
        )

    def check_overlap(
        self,
        work_center_id: str,
        start: date | datetime | str,
        end: date | datetime | str,
        exclude_id: str | None = None,
    ) -> bool:
        """
        Check if a date range collides with an order on the work center.

        Args:
            work_center_id: Work center to check
            start: Range start (inclusive)
            end: Range end (exclusive)
            exclude_id: Order to leave out, for preflighting an edit

        Returns:
            True if an overlap is detected
        """
        return (
            find_conflict(
                self._work_orders.current,
                work_center_id,
                coerce_date(start),
                coerce_date(end),
                exclude_id,
            )
            is not None
        )

    # Subscriptions

    def subscribe_work_orders(
        self, callback: Callable[[tuple[WorkOrder, ...]], None]
    ) -> Callable[[], None]:
        """Receive the current work orders now and after every change."""
        return self._work_orders.subscribe(callback)

    def subscribe_work_centers(
        self, callback: Callable[[tuple[WorkCenter, ...]], None]
    ) -> Callable[[], None]:
        """Receive the current work centers now and after every change."""
        return self._work_centers.subscribe(callback)

    # Mutations

    def create_work_order(self, fields: Mapping[str, Any]) -> MutationResult:
        """
        Create a work order after validating fields and overlap.

        Args:
            fields: Work center id, name, status, start and end date

        Returns:
            Result with the created order, or a ValidationError / OverlapError
        """
        validation = validate(fields)
        if not validation.success:
            return self._reject("create", validation.error)

        candidate = validation.value
        conflict = find_conflict(
            self._work_orders.current,
            candidate.work_center_id,
            candidate.start_date,
            candidate.end_date,
        )
        if conflict is not None:
            return self._reject(
                "create",
                OverlapError(
                    candidate.work_center_id,
                    candidate.start_date,
                    candidate.end_date,
                    conflict.id,
                ),
            )

        order = WorkOrder.create(**candidate.model_dump())
        self._commit_work_orders(self._work_orders.current + (order,))

        logger.info(
            "work_order_created",
            work_order_id=order.id,
            work_center_id=order.work_center_id,
            start_date=order.start_date.isoformat(),
            end_date=order.end_date.isoformat(),
            duration_days=order.duration_days,
        )
        return Result.ok(order)

    def update_work_order(
        self, order_id: str, changes: Mapping[str, Any]
    ) -> MutationResult:
        """
        Merge changes onto an existing order and commit if still valid.

        The merged record is revalidated against every other order on its
        (possibly new) work center. On any failure nothing is changed.

        Args:
            order_id: Order to update
            changes: Subset of work center id, name, status, start and end date

        Returns:
            Result with the updated order, or a NotFoundError /
            ValidationError / OverlapError
        """
        current = self._work_orders.current
        index = next((i for i, wo in enumerate(current) if wo.id == order_id), None)
        if index is None:
            return self._reject("update", NotFoundError(order_id))

        existing = current[index]
        merged = existing.model_dump(exclude={"id"})
        merged.update(
            {
                key: value
                for key, value in normalize_field_names(changes).items()
                if key not in _IDENTITY_FIELDS
            }
        )

        validation = validate(merged)
        if not validation.success:
            return self._reject("update", validation.error)

        candidate = validation.value
        conflict = find_conflict(
            current,
            candidate.work_center_id,
            candidate.start_date,
            candidate.end_date,
            exclude_id=order_id,
        )
        if conflict is not None:
            return self._reject(
                "update",
                OverlapError(
                    candidate.work_center_id,
                    candidate.start_date,
                    candidate.end_date,
                    conflict.id,
                ),
            )

        updated = WorkOrder(id=existing.id, **candidate.model_dump())
        self._commit_work_orders(current[:index] + (updated,) + current[index + 1 :])

        logger.info(
            "work_order_updated",
            work_order_id=order_id,
            work_center_id=updated.work_center_id,
            start_date=updated.start_date.isoformat(),
            end_date=updated.end_date.isoformat(),
        )
        return Result.ok(updated)

    def delete_work_order(self, order_id: str) -> None:
        """Remove an order; unknown ids are a silent no-op."""
        current = self._work_orders.current
        remaining = tuple(wo for wo in current if wo.id != order_id)
        if len(remaining) == len(current):
            return

        self._commit_work_orders(remaining)
        logger.info("work_order_deleted", work_order_id=order_id)

    # Internals

    def _commit_work_orders(self, work_orders: tuple[WorkOrder, ...]) -> None:
        self._work_orders.publish(work_orders)
        self._save(self._work_orders_key, DocumentMapper.work_orders_to_json(work_orders))

    def _reject(self, operation: str, error: DomainError) -> MutationResult:
        logger.info(
            "work_order_rejected",
            operation=operation,
            error_type=error.error_type.value,
            reason=error.message,
        )
        return Result.fail(error)

    @staticmethod
    def _load_work_orders(raw: str) -> tuple[WorkOrder, ...]:
        work_orders = DocumentMapper.work_orders_from_json(raw)

        ids = [wo.id for wo in work_orders]
        duplicates = sorted({order_id for order_id in ids if ids.count(order_id) > 1})
        if duplicates:
            logger.warning(
                "stored_work_orders_rejected", reason="duplicate_ids", order_ids=duplicates
            )
            raise ValueError(f"duplicate work order ids: {', '.join(duplicates)}")

        conflicts = find_overlapping_pairs(work_orders)
        if conflicts:
            overlapping = sorted({wo.id for pair in conflicts for wo in pair})
            logger.warning(
                "stored_work_orders_rejected", reason="overlap", order_ids=overlapping
            )
            raise ValueError(f"overlapping work orders: {', '.join(overlapping)}")
        return work_orders

    def _load_collection(
        self,
        key: str,
        parse: Callable[[str], tuple[T, ...]],
        default: tuple[T, ...],
    ) -> tuple[T, ...]:
        try:
            raw = self._storage.load(key)
        except Exception as e:
            logger.warning("storage_fallback", key=key, error=str(e))
            return default

        if raw:
            try:
                collection = parse(raw)
            except (pydantic.ValidationError, ValueError) as e:
                logger.warning("storage_fallback", key=key, error=str(e))
                return default
            if collection:
                return collection

        logger.info("storage_seeded", key=key, count=len(default))
        return default

    def _save(self, key: str, value: str) -> None:
        try:
            self._storage.save(key, value)
        except Exception as e:
            logger.error("storage_save_failed", key=key, error=str(e))

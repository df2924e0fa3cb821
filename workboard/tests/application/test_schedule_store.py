"""
Tests for the ScheduleStore application service.

Covers queries, the overlap rule at the mutation boundary, atomic failure,
subscriber notification and the persistence contract with fallback to the
bundled dataset.
"""

import json
from datetime import date

import pytest
from structlog.testing import capture_logs

from workboard.application.services.schedule_store import ScheduleStore
from workboard.domain.scheduling.repositories.key_value_storage import KeyValueStorage
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus
from workboard.domain.shared.exceptions import (
    ErrorType,
    NotFoundError,
    OverlapError,
    StorageError,
    ValidationError,
)
from workboard.infrastructure.persistence.document_mapper import DocumentMapper
from workboard.infrastructure.persistence.key_value_stores import InMemoryKeyValueStorage

from ..factories import day, make_order, order_fields


class FailingStorage(KeyValueStorage):
    """Storage whose writes always fail."""

    def __init__(self):
        self.save_attempts = 0

    def load(self, key: str) -> str | None:
        return None

    def save(self, key: str, value: str) -> None:
        self.save_attempts += 1
        raise StorageError(key, "disk full")


class UnreadableStorage(InMemoryKeyValueStorage):
    """Storage whose reads raise the given error."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    def load(self, key: str) -> str | None:
        raise self.error


class TestQueries:
    def test_seeded_collections(self, store):
        assert [wc.id for wc in store.list_work_centers()] == [
            "wc_001",
            "wc_002",
            "wc_003",
            "wc_004",
            "wc_005",
        ]
        assert len(store.list_work_orders()) == 10

    def test_get_by_id(self, store):
        assert store.get_work_order("wo_002").status is WorkOrderStatus.IN_PROGRESS
        assert store.get_work_order("wo_999") is None
        assert store.get_work_center("wc_004").name == "Quality Control"
        assert store.get_work_center("wc_999") is None

    def test_orders_for_center_preserves_collection_order(self, store):
        assert [wo.id for wo in store.orders_for_center("wc_001")] == [
            "wo_001",
            "wo_002",
            "wo_003",
        ]
        assert store.orders_for_center("wc_unknown") == ()

    def test_check_overlap_accepts_iso_strings(self, store):
        assert store.check_overlap("wc_001", "2024-06-13", "2024-06-14")
        assert not store.check_overlap("wc_001", "2024-06-10", "2024-06-12")

    def test_check_overlap_with_exclusion(self, store):
        assert store.check_overlap("wc_001", day(-2), day(3))
        assert not store.check_overlap("wc_001", day(-2), day(3), exclude_id="wo_002")


class TestCreate:
    def test_scenario_after_completed_order_succeeds(self, small_store):
        """Test creating day -3 to day +4 next to an order ending on day -5."""
        result = small_store.create_work_order(order_fields("wc_001", -3, 4))
        assert result.success
        assert result.value.id.startswith("wo_")
        assert result.value in small_store.list_work_orders()

    def test_scenario_overlapping_completed_order_fails(self, small_store):
        """Test creating day -6 to day -1 over an order from day -10 to day -5."""
        result = small_store.create_work_order(order_fields("wc_001", -6, -1))
        assert not result.success
        assert isinstance(result.error, OverlapError)
        assert result.error.conflicting_order_id == "wo_001"
        assert result.message == "Work order overlaps with an existing order on this work center"

    def test_same_dates_on_other_center_succeed(self, small_store):
        result = small_store.create_work_order(order_fields("wc_002", -6, -1))
        assert result.success

    def test_start_equal_to_end_is_validation_error(self, small_store):
        result = small_store.create_work_order(order_fields("wc_001", 20, 20))
        assert isinstance(result.error, ValidationError)
        assert result.error.error_type is ErrorType.VALIDATION
        assert len(small_store.list_work_orders()) == 1

    def test_camel_case_fields(self, small_store):
        result = small_store.create_work_order(
            {
                "workCenterId": "wc_002",
                "name": "Custom Component Fabrication",
                "status": "blocked",
                "startDate": "2024-06-15",
                "endDate": "2024-06-22",
            }
        )
        assert result.success
        assert result.value.start_date == date(2024, 6, 15)

    def test_create_appends_and_persists(self, small_store, storage):
        created = small_store.create_work_order(order_fields("wc_002", 0, 3)).unwrap()
        assert small_store.list_work_orders()[-1] == created

        persisted = DocumentMapper.work_orders_from_json(storage.load("workOrders"))
        assert persisted == small_store.list_work_orders()

    def test_create_logs_event(self, small_store):
        with capture_logs() as logs:
            created = small_store.create_work_order(order_fields("wc_002", 0, 3)).unwrap()
        assert {
            "event": "work_order_created",
            "log_level": "info",
            "work_order_id": created.id,
            "work_center_id": "wc_002",
            "start_date": "2024-06-15",
            "end_date": "2024-06-18",
        } in logs


class TestUpdate:
    def test_unknown_id(self, store):
        result = store.update_work_order("wo_missing", {"name": "x"})
        assert isinstance(result.error, NotFoundError)
        assert result.message == "Work order not found"

    def test_partial_update_merges(self, store):
        result = store.update_work_order("wo_003", {"status": "blocked"})
        assert result.success
        updated = store.get_work_order("wo_003")
        assert updated.status is WorkOrderStatus.BLOCKED
        assert updated.name == "Steel Rod Production"
        assert updated.start_date == day(5)

    def test_order_keeps_position_in_collection(self, store):
        before = [wo.id for wo in store.list_work_orders()]
        store.update_work_order("wo_004", {"name": "Renamed"})
        assert [wo.id for wo in store.list_work_orders()] == before

    def test_self_exclusion(self, store):
        """Test that re-saving an order's own dates never conflicts with itself."""
        order = store.get_work_order("wo_002")
        result = store.update_work_order(
            order.id,
            {"start_date": order.start_date, "end_date": order.end_date, "name": "Same dates"},
        )
        assert result.success

    def test_extending_into_neighbour_fails_atomically(self, store):
        before = store.list_work_orders()
        result = store.update_work_order("wo_002", {"end_date": day(6)})
        assert isinstance(result.error, OverlapError)
        assert result.error.conflicting_order_id == "wo_003"
        assert store.list_work_orders() == before
        assert store.get_work_order("wo_002").end_date == day(4)

    def test_invalid_update_changes_nothing(self, store, storage):
        saved_before = storage.load("workOrders")
        received = []
        store.subscribe_work_orders(received.append)

        result = store.update_work_order("wo_003", {"end_date": day(5)})

        assert isinstance(result.error, ValidationError)
        assert store.get_work_order("wo_003").end_date == day(12)
        assert storage.load("workOrders") == saved_before
        assert len(received) == 1

    def test_move_to_other_center_checks_that_center(self, store):
        # wo_010 is on wc_005 from day 1 to day 8; wc_002 has wo_005 from day 0 to day 7
        result = store.update_work_order("wo_010", {"work_center_id": "wc_002"})
        assert isinstance(result.error, OverlapError)
        assert result.error.work_center_id == "wc_002"

    def test_identity_fields_are_ignored(self, store):
        result = store.update_work_order("wo_003", {"id": "wo_hijack", "docId": "x", "name": "Kept"})
        assert result.value.id == "wo_003"
        assert store.get_work_order("wo_hijack") is None

    def test_rejection_logged(self, store):
        with capture_logs() as logs:
            store.update_work_order("wo_002", {"end_date": day(6)})
        rejected = [entry for entry in logs if entry["event"] == "work_order_rejected"]
        assert rejected[0]["error_type"] == "resource_conflict"
        assert rejected[0]["operation"] == "update"


class TestDelete:
    def test_delete_removes_order(self, store, storage):
        store.delete_work_order("wo_001")
        assert store.get_work_order("wo_001") is None
        assert "wo_001" not in storage.load("workOrders")

    def test_delete_is_idempotent(self, store):
        store.delete_work_order("wo_001")
        snapshot = store.list_work_orders()
        received = []
        store.subscribe_work_orders(received.append)

        store.delete_work_order("wo_001")
        store.delete_work_order("wo_never_existed")

        assert store.list_work_orders() == snapshot
        assert received == [snapshot]

    def test_freed_slot_can_be_reused(self, store):
        assert not store.create_work_order(order_fields("wc_001", -3, 4)).success
        store.delete_work_order("wo_002")
        assert store.create_work_order(order_fields("wc_001", -3, 4)).success


class TestSubscriptions:
    def test_subscriber_receives_current_then_each_change(self, small_store):
        received = []
        small_store.subscribe_work_orders(received.append)
        created = small_store.create_work_order(order_fields("wc_002", 0, 3)).unwrap()
        small_store.delete_work_order(created.id)

        assert [len(snapshot) for snapshot in received] == [1, 2, 1]
        assert created in received[1]

    def test_failed_mutation_does_not_notify(self, small_store):
        received = []
        small_store.subscribe_work_orders(received.append)
        small_store.create_work_order(order_fields("wc_001", -6, -1))
        assert len(received) == 1

    def test_unsubscribe(self, small_store):
        received = []
        unsubscribe = small_store.subscribe_work_orders(received.append)
        unsubscribe()
        small_store.create_work_order(order_fields("wc_002", 0, 3))
        assert len(received) == 1

    def test_work_center_subscription(self, small_store):
        received = []
        small_store.subscribe_work_centers(received.append)
        assert [wc.id for wc in received[0]] == ["wc_001", "wc_002"]


class TestPersistence:
    def test_initial_snapshot_saved(self, store, storage):
        documents = json.loads(storage.load("workOrders"))
        assert len(documents) == 10
        assert documents[0] == {
            "docId": "wo_001",
            "docType": "workOrder",
            "data": {
                "name": "Plastic Profile Batch #1234",
                "workCenterId": "wc_001",
                "status": "complete",
                "startDate": "2024-06-05",
                "endDate": "2024-06-10",
            },
        }
        assert json.loads(storage.load("workCenters"))[0] == {
            "docId": "wc_001",
            "docType": "workCenter",
            "data": {"name": "Extrusion Line A"},
        }

    def test_reload_from_storage(self, small_store, storage, today):
        created = small_store.create_work_order(order_fields("wc_002", 0, 3)).unwrap()
        reopened = ScheduleStore(storage, today=today)
        assert reopened.list_work_orders() == small_store.list_work_orders()
        assert reopened.get_work_order(created.id) == created
        assert [wc.id for wc in reopened.list_work_centers()] == ["wc_001", "wc_002"]

    def test_custom_storage_keys(self, storage, today):
        ScheduleStore(storage, work_orders_key="orders", work_centers_key="centers", today=today)
        assert storage.keys() == ["centers", "orders"]

    @pytest.mark.parametrize(
        "raw",
        [
            "[]",
            "not json",
            '{"docId": "wo_1"}',
            '[{"docId": "wo_1", "docType": "workOrder", "data": {"name": "x"}}]',
        ],
    )
    def test_unusable_orders_fall_back_to_seed(self, raw, today):
        storage = InMemoryKeyValueStorage({"workOrders": raw})
        store = ScheduleStore(storage, today=today)
        assert len(store.list_work_orders()) == 10

    def test_corrupt_data_logs_warning(self, today):
        storage = InMemoryKeyValueStorage({"workOrders": "{broken"})
        with capture_logs() as logs:
            ScheduleStore(storage, today=today)
        fallback = [entry for entry in logs if entry["event"] == "storage_fallback"]
        assert fallback[0]["log_level"] == "warning"
        assert fallback[0]["key"] == "workOrders"

    def test_overlapping_persisted_orders_fall_back_to_seed(self, today):
        raw = DocumentMapper.work_orders_to_json(
            (make_order("wo_x", "wc_001", 0, 5), make_order("wo_y", "wc_001", 3, 8))
        )
        with capture_logs() as logs:
            store = ScheduleStore(InMemoryKeyValueStorage({"workOrders": raw}), today=today)
        assert store.get_work_order("wo_x") is None
        assert len(store.list_work_orders()) == 10
        rejected = [entry for entry in logs if entry["event"] == "stored_work_orders_rejected"]
        assert rejected[0]["reason"] == "overlap"
        assert rejected[0]["order_ids"] == ["wo_x", "wo_y"]

    def test_duplicate_ids_fall_back_to_seed(self, today):
        raw = DocumentMapper.work_orders_to_json(
            (make_order("wo_x", "wc_001", 0, 5), make_order("wo_x", "wc_002", 0, 5))
        )
        with capture_logs() as logs:
            store = ScheduleStore(InMemoryKeyValueStorage({"workOrders": raw}), today=today)
        assert store.get_work_order("wo_x") is None
        rejected = [entry for entry in logs if entry["event"] == "stored_work_orders_rejected"]
        assert rejected[0]["reason"] == "duplicate_ids"
        assert rejected[0]["order_ids"] == ["wo_x"]

    def test_inverted_persisted_dates_fall_back_to_seed(self, today):
        documents = json.loads(
            DocumentMapper.work_orders_to_json((make_order("wo_x", "wc_001", 0, 5),))
        )
        documents[0]["data"]["endDate"] = "2024-06-01"
        store = ScheduleStore(
            InMemoryKeyValueStorage({"workOrders": json.dumps(documents)}), today=today
        )
        assert store.get_work_order("wo_x") is None

    @pytest.mark.parametrize(
        "error", [StorageError("workOrders", "read failed"), RuntimeError("disk gone")]
    )
    def test_read_failure_at_startup_falls_back_to_seed(self, error, today):
        with capture_logs() as logs:
            store = ScheduleStore(UnreadableStorage(error), today=today)

        assert len(store.list_work_orders()) == 10
        assert len(store.list_work_centers()) == 5
        fallback = [entry for entry in logs if entry["event"] == "storage_fallback"]
        assert [entry["key"] for entry in fallback] == ["workCenters", "workOrders"]
        assert all(entry["log_level"] == "warning" for entry in fallback)

    def test_save_failure_is_logged_and_swallowed(self, small_seed):
        failing = FailingStorage()
        with capture_logs() as logs:
            store = ScheduleStore(failing, seed=small_seed)
            result = store.create_work_order(order_fields("wc_002", 0, 3))

        assert result.success
        assert len(store.list_work_orders()) == 2
        assert failing.save_attempts == 3
        errors = [entry for entry in logs if entry["event"] == "storage_save_failed"]
        assert len(errors) == 3
        assert all(entry["log_level"] == "error" for entry in errors)

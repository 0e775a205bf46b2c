"""Tests for key-value stores, the store factory and the audit logger."""

import json

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import StorageSettings
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.storage import (
    AUDIT_LOG_KEY,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
    create_store,
)


class BrokenStore(KeyValueStore):
    """Store whose writes always fail."""

    def get(self, key):
        return None

    def set(self, key, value):
        raise StorageError("disk full")

    def remove(self, key):
        raise StorageError("disk full")


class TestInMemoryStore:
    """Tests for the dict-backed store."""

    def test_get_missing(self):
        """Test missing keys read as None."""
        assert InMemoryKeyValueStore().get("nope") is None

    def test_set_get_remove(self):
        """Test the basic key-value contract."""
        store = InMemoryKeyValueStore()
        store.set("k", "v1")
        store.set("k", "v2")
        assert store.get("k") == "v2"
        store.remove("k")
        store.remove("k")
        assert store.get("k") is None

    def test_initial_data_is_copied(self):
        """Test the initial dict is not shared."""
        initial = {"a": "1"}
        store = InMemoryKeyValueStore(initial)
        store.set("b", "2")
        assert initial == {"a": "1"}
        assert store.snapshot() == {"a": "1", "b": "2"}


class TestJsonFileStore:
    """Tests for the JSON file store."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test a store file that does not exist yet."""
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        assert store.get("expenses") is None

    def test_persists_across_instances(self, tmp_path):
        """Test values survive a new store instance."""
        path = tmp_path / "nested" / "store.json"
        JsonFileKeyValueStore(path).set("selectedCurrency", '{"code": "INR"}')
        assert JsonFileKeyValueStore(path).get("selectedCurrency") == '{"code": "INR"}'

    def test_file_is_a_json_object(self, tmp_path):
        """Test the on-disk format."""
        path = tmp_path / "store.json"
        store = JsonFileKeyValueStore(path)
        store.set("a", "₹1")
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "₹1"}

    def test_remove(self, tmp_path):
        """Test removal is persisted and idempotent."""
        path = tmp_path / "store.json"
        store = JsonFileKeyValueStore(path)
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")
        store.remove("a")
        assert JsonFileKeyValueStore(path).get("a") is None
        assert JsonFileKeyValueStore(path).get("b") == "2"

    def test_no_temp_files_left(self, tmp_path):
        """Test atomic writes clean up after themselves."""
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file(self, tmp_path):
        """Test unreadable JSON raises StorageError."""
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileKeyValueStore(path).get("a")

    def test_wrong_shape(self, tmp_path):
        """Test a JSON file that is not an object of strings."""
        path = tmp_path / "store.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(StorageError, match="string values"):
            JsonFileKeyValueStore(path).get("a")


class TestCreateStore:
    """Tests for the store factory."""

    def test_memory_backend(self):
        """Test the default backend."""
        assert isinstance(create_store(StorageSettings(backend="memory")), InMemoryKeyValueStore)

    def test_json_backend(self, tmp_path):
        """Test the JSON backend uses the configured path."""
        settings = StorageSettings(backend="json", data_dir=tmp_path, filename="x.json")
        store = create_store(settings)
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == tmp_path / "x.json"

    def test_unknown_backend_rejected(self):
        """Test the settings refuse unknown backends."""
        with pytest.raises(ValueError):
            StorageSettings(backend="postgres")


class TestAuditLogger:
    """Tests for audit logging and persistence."""

    def test_local_only(self):
        """Test logging without a store succeeds."""
        logger = AuditLogger()
        assert logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee")) is True
        assert logger.recent_events() == []

    def test_persists_events(self, store):
        """Test events are appended to the store."""
        logger = AuditLogger(store)
        logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee"))
        logger.log(AuditEventBuilder.data_exported("expenses-2024-12-01.json", 3))
        events = json.loads(store.get(AUDIT_LOG_KEY))
        assert [e["event_type"] for e in events] == ["currency_selected", "data_exported"]

    def test_recent_events_newest_first(self, store):
        """Test recent events are returned newest first."""
        logger = AuditLogger(store)
        logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee"))
        logger.log(AuditEventBuilder.currency_selected("USD", "US Dollar"))
        recent = logger.recent_events(limit=1)
        assert len(recent) == 1
        assert recent[0]["details"]["code"] == "USD"

    def test_bounded_history(self, store):
        """Test the oldest events are dropped beyond max_events."""
        logger = AuditLogger(store, max_events=2)
        for code in ("INR", "USD", "EUR"):
            logger.log(AuditEventBuilder.currency_selected(code, code))
        codes = [e["details"]["code"] for e in json.loads(store.get(AUDIT_LOG_KEY))]
        assert codes == ["USD", "EUR"]

    def test_persistence_disabled(self, store):
        """Test max_events=0 keeps the audit log out of the store."""
        logger = AuditLogger(store, max_events=0)
        assert logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee")) is True
        assert store.get(AUDIT_LOG_KEY) is None

    def test_storage_failure_is_swallowed(self):
        """Test a failing store does not break the caller."""
        logger = AuditLogger(BrokenStore())
        assert logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee")) is False

    def test_corrupt_audit_log_is_swallowed(self, store):
        """Test a corrupt stored log does not break the caller."""
        store.set(AUDIT_LOG_KEY, '{"not": "a list"}')
        logger = AuditLogger(store)
        assert logger.log(AuditEventBuilder.currency_selected("INR", "Indian Rupee")) is False

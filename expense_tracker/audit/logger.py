"""
Audit Logger

DESIGN DECISION: Every change to the user's data is logged.
This provides:
1. Traceability of edits and deletions
2. Debugging capability
3. A history the user can look back on

The audit logger:
- Always writes a structured local log line
- Optionally appends the event to the key-value store (bounded list)
- Gracefully handles failures (a broken store never breaks the app)
"""

import json
from typing import Optional

from expense_tracker.logs import get_logger
from expense_tracker.models.audit import AuditEvent, AuditSeverity
from expense_tracker.storage import AUDIT_LOG_KEY, KeyValueStore, StorageError


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The key-value store (for persistence and user visibility)
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        max_events: int = 500,
    ):
        """
        Initialize audit logger.

        Args:
            store: Store to append events to.
                   If None, only logs locally.
            max_events: Oldest events are dropped beyond this many.
                        0 disables persistence.
        """
        self._store = store
        self._max_events = max_events
        self._logger = get_logger("expense_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the store if available.

        Returns True if the store write succeeded (or no store configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._store is None or self._max_events == 0:
            return True

        try:
            events = self._read_events()
            events.append(log_dict)
            self._store.set(
                AUDIT_LOG_KEY,
                json.dumps(events[-self._max_events:], ensure_ascii=False),
            )
            return True
        except (StorageError, ValueError) as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def recent_events(self, limit: int = 100) -> list[dict]:
        """Most recent persisted events, newest first."""
        if self._store is None:
            return []
        return list(reversed(self._read_events()))[:limit]

    def _read_events(self) -> list[dict]:
        raw = self._store.get(AUDIT_LOG_KEY) if self._store else None
        if not raw:
            return []
        events = json.loads(raw)
        if not isinstance(events, list):
            raise ValueError("Audit log in store is not a JSON list")
        return events

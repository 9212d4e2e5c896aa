"""
Tracker State Repository

Reads and writes the four tracker records on top of any
KeyValueStoreInterface.

DESIGN DECISION: Loading is fail-soft. A missing key, a JSON null, text
that is not JSON, or JSON that does not match the schema all come back
as the caller's fallback. The recovery is logged, never raised: a
corrupt habit log must not stop the ledger from opening.

Saving is best effort. Every save writes the WHOLE collection for its
key. A failed write is logged and reported as False; it is not retried.
"""

import json
from decimal import Decimal
from typing import Any, Optional

from personal_tracker.audit import AuditLogger
from personal_tracker.models.finance import FinanceEntry
from personal_tracker.models.habit import Habit
from personal_tracker.models.state import (
    ACTIVITIES_KEY,
    FINANCES_KEY,
    HABIT_LOGS_KEY,
    MONTHLY_BUDGET_KEY,
    TrackerSnapshot,
)
from personal_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
)


# Store key -> TrackerSnapshot field holding its validated value
FIELD_BY_KEY = {
    ACTIVITIES_KEY: "activities",
    FINANCES_KEY: "finances",
    HABIT_LOGS_KEY: "habit_logs",
    MONTHLY_BUDGET_KEY: "monthly_budget",
}


class TrackerRepository:
    """Fail-soft JSON persistence for tracker state."""

    def __init__(
        self,
        store: KeyValueStoreInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def store(self) -> KeyValueStoreInterface:
        return self._store

    def _validate(self, key: str, value: Any) -> Any:
        """Run a decoded value through the snapshot schema for its key."""
        snapshot = TrackerSnapshot.model_validate({key: value})
        return getattr(snapshot, FIELD_BY_KEY[key])

    def load(self, key: str, fallback: Any) -> Any:
        """
        Read ``key``, returning ``fallback`` on any problem.

        Known tracker keys come back as validated models
        (list[Habit], list[FinanceEntry], dict, Decimal); other keys
        come back as decoded JSON. Never raises.
        """
        try:
            raw = self._store.get(key)
            if raw is None:
                return fallback
            value = json.loads(raw)
            if value is None:
                return fallback
            if key in FIELD_BY_KEY:
                value = self._validate(key, value)
            return value
        except (StorageError, ValueError, TypeError, RecursionError, MemoryError) as e:
            # json.JSONDecodeError and pydantic's ValidationError are ValueErrors;
            # pathologically nested JSON raises RecursionError
            self._audit_logger.log_store_read_recovered(key, str(e))
            return fallback

    def save(self, key: str, value: Any) -> bool:
        """
        Write a JSON-ready value under ``key``.

        Returns False (after logging) if the write failed.
        """
        try:
            raw = json.dumps(value, ensure_ascii=False)
            self._store.set(key, raw)
        except (StorageError, TypeError, ValueError, RecursionError) as e:
            self._audit_logger.log_store_write_failed(key, str(e))
            return False
        return True

    # -------------------------------------------------------------------------
    # Typed helpers
    # -------------------------------------------------------------------------

    def load_snapshot(self) -> TrackerSnapshot:
        """Read all four records. Each falls back independently."""
        snapshot = TrackerSnapshot(
            activities=self.load(ACTIVITIES_KEY, []),
            finances=self.load(FINANCES_KEY, []),
            habit_logs=self.load(HABIT_LOGS_KEY, {}),
            monthly_budget=self.load(MONTHLY_BUDGET_KEY, None),
        )
        self._audit_logger.log_state_loaded({
            "activities": len(snapshot.activities),
            "finances": len(snapshot.finances),
            "log_days": len(snapshot.habit_logs),
        })
        return snapshot

    def save_snapshot(self, snapshot: TrackerSnapshot) -> bool:
        """Write all four records. True only if every write succeeded."""
        results = [self.save(key, value) for key, value in snapshot.to_wire().items()]
        return all(results)

    def save_activities(self, habits: list[Habit]) -> bool:
        return self.save(ACTIVITIES_KEY, [h.to_record() for h in habits])

    def save_finances(self, entries: list[FinanceEntry]) -> bool:
        return self.save(FINANCES_KEY, [e.to_record() for e in entries])

    def save_habit_logs(self, logs: dict[str, list[str]]) -> bool:
        return self.save(HABIT_LOGS_KEY, logs)

    def save_budget(self, budget: Optional[Decimal]) -> bool:
        wire = TrackerSnapshot(monthly_budget=budget).to_wire()
        return self.save(MONTHLY_BUDGET_KEY, wire[MONTHLY_BUDGET_KEY])

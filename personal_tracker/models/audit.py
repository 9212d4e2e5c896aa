"""
Audit Models for Personal Tracker

Every state change in the tracker is described by an AuditEvent and
written to the structured log. This gives:
1. A readable history of what the user did and when
2. Debugging information when persisted state looks wrong
3. Visibility into silent recoveries (corrupt store values, failed writes)

DESIGN DECISION: Audit events are log records only. They are never
persisted to the tracker's own store and never read back.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Habits
    HABIT_ADDED = "habit_added"
    HABIT_COMPLETED = "habit_completed"
    HABIT_RESET = "habit_reset"
    HABIT_DELETED = "habit_deleted"
    HABIT_TOGGLED = "habit_toggled"

    # Ledger
    ENTRY_ADDED = "entry_added"
    ENTRY_DELETED = "entry_deleted"
    BUDGET_SAVED = "budget_saved"

    # Rejections
    VALIDATION_FAILED = "validation_failed"

    # Store
    STATE_LOADED = "state_loaded"
    STORE_READ_RECOVERED = "store_read_recovered"
    STORE_WRITE_FAILED = "store_write_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every state change creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'habit', 'entry', 'store')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID (or store key) of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.habit_added(habit_id, name)
        event = AuditEventBuilder.store_write_failed(key, error)
    """

    @staticmethod
    def habit_added(habit_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_ADDED,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit added: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def habit_completed(habit_id: str, name: str, day: str, streak: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_COMPLETED,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit done: {name} (streak {streak})",
            details={"name": name, "day": day, "streak": streak},
            is_user_action=True,
        )

    @staticmethod
    def habit_reset(habit_id: str, name: str, previous_streak: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_RESET,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit streak reset: {name}",
            details={"name": name, "previous_streak": previous_streak},
            is_user_action=True,
        )

    @staticmethod
    def habit_deleted(habit_id: str, name: str, purged_days: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_DELETED,
            entity_type="habit",
            entity_id=habit_id,
            description=f"Habit deleted: {name}",
            details={"name": name, "purged_days": purged_days},
            is_user_action=True,
        )

    @staticmethod
    def habit_toggled(name: str, day: str, done: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_TOGGLED,
            entity_type="habit",
            description=f"Habit {'marked' if done else 'unmarked'} on {day}: {name}",
            details={"name": name, "day": day, "done": done},
            is_user_action=True,
        )

    @staticmethod
    def entry_added(entry_id: str, kind: str, amount: str, day: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entity_type="entry",
            entity_id=entry_id,
            description=f"{kind.capitalize()} recorded: {amount}",
            details={"kind": kind, "amount": amount, "day": day},
            is_user_action=True,
        )

    @staticmethod
    def entry_deleted(entry_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type="entry",
            entity_id=entry_id,
            description="Ledger entry deleted",
            is_user_action=True,
        )

    @staticmethod
    def budget_saved(budget: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SAVED,
            entity_type="budget",
            description=f"Monthly budget {'set to ' + budget if budget else 'cleared'}",
            details={"budget": budget},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(operation: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{operation} rejected with {len(issues)} issue(s)",
            details={"operation": operation, "issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def state_loaded(counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            description="Tracker state loaded",
            details=counts,
        )

    @staticmethod
    def store_read_recovered(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_READ_RECOVERED,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            entity_id=key,
            description=f"Unreadable value for '{key}' replaced by default",
            error_message=error_message,
        )

    @staticmethod
    def store_write_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            entity_id=key,
            description=f"Could not persist '{key}'",
            error_message=error_message,
        )

"""
Data Models Package

This package contains all Pydantic models used in the Personal Tracker.
All data flowing in and out of the store must conform to these schemas.
"""

from personal_tracker.models.habit import (
    CompletionLog,
    Habit,
    WeekDay,
    new_id,
)
from personal_tracker.models.finance import (
    BudgetState,
    BudgetStatus,
    EntryKind,
    FinanceEntry,
    FinanceSummary,
    MonthlyTotals,
)
from personal_tracker.models.calendar import (
    CalendarDay,
    CalendarMonth,
    DayDetail,
)
from personal_tracker.models.state import (
    ACTIVITIES_KEY,
    FINANCES_KEY,
    HABIT_LOGS_KEY,
    MONTHLY_BUDGET_KEY,
    STATE_KEYS,
    TrackerSnapshot,
)
from personal_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Habit models
    "CompletionLog",
    "Habit",
    "WeekDay",
    "new_id",
    # Finance models
    "BudgetState",
    "BudgetStatus",
    "EntryKind",
    "FinanceEntry",
    "FinanceSummary",
    "MonthlyTotals",
    # Calendar models
    "CalendarDay",
    "CalendarMonth",
    "DayDetail",
    # Persisted state
    "ACTIVITIES_KEY",
    "FINANCES_KEY",
    "HABIT_LOGS_KEY",
    "MONTHLY_BUDGET_KEY",
    "STATE_KEYS",
    "TrackerSnapshot",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

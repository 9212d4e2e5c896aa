"""
Main Orchestrator for Personal Tracker

This module ties the engines to the store and is the only thing a
rendering layer needs to talk to.

FLOW for every user action:
1. Call exactly one tracker operation
2. The operation validates, mutates, then writes the whole affected
   collection(s) back to the store
3. The caller re-reads whatever it displays (there are no events or
   subscriptions; the tracker is pull-based)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Rejected input changes nothing and is audited, then re-raised
- Unknown ids are silent no-ops (nothing written, nothing raised)
- Store failures never reach the caller; they are logged by the repository
"""

from decimal import Decimal
from functools import partial
from typing import Callable, Optional

from personal_tracker.audit import AuditLogger, configure_logging
from personal_tracker.config import Settings, get_settings
from personal_tracker.dates import today as today_in
from personal_tracker.engines import CalendarAggregator, FinanceEngine, HabitEngine
from personal_tracker.models.calendar import CalendarMonth, DayDetail
from personal_tracker.models.finance import (
    BudgetStatus,
    FinanceEntry,
    FinanceSummary,
    MonthlyTotals,
)
from personal_tracker.models.habit import CompletionLog, Habit, WeekDay
from personal_tracker.models.state import TrackerSnapshot
from personal_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    TrackerRepository,
)
from personal_tracker.validation import ValidationError, parse_budget


class PersonalTracker:
    """
    Habits, ledger, budget and calendar behind one object.

    State is read once from the repository when the tracker is built.
    """

    def __init__(
        self,
        repository: TrackerRepository,
        today: Callable[[], str],
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "₹",
    ):
        self._repository = repository
        self._today = today
        self._audit_logger = audit_logger or AuditLogger()
        self._currency_symbol = currency_symbol

        snapshot = repository.load_snapshot()
        self._habits = HabitEngine(
            snapshot.activities,
            CompletionLog(snapshot.habit_logs),
            today,
        )
        self._finance = FinanceEngine(snapshot.finances, today)
        self._calendar = CalendarAggregator(self._habits, self._finance, today)
        self._budget: Optional[Decimal] = snapshot.monthly_budget

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def habits(self) -> list[Habit]:
        return self._habits.habits

    @property
    def entries(self) -> list[FinanceEntry]:
        return self._finance.entries

    @property
    def completion_log(self) -> dict[str, list[str]]:
        return self._habits.completion_log.to_dict()

    @property
    def monthly_budget(self) -> Optional[Decimal]:
        return self._budget

    def today(self) -> str:
        return self._today()

    def snapshot(self) -> TrackerSnapshot:
        """Current full state, detached from the engines."""
        return TrackerSnapshot(
            activities=[h.model_copy() for h in self._habits.habits],
            finances=self._finance.entries,
            habit_logs=self._habits.completion_log.to_dict(),
            monthly_budget=self._budget,
        )

    def _rejected(self, error: ValidationError) -> None:
        self._audit_logger.log_validation_failed(
            error.result.operation,
            error.result.issue_dicts(),
        )

    def _save_habits(self) -> None:
        self._repository.save_activities(self._habits.habits)

    def _save_log(self) -> None:
        self._repository.save_habit_logs(self._habits.completion_log.to_dict())

    # -------------------------------------------------------------------------
    # Habits
    # -------------------------------------------------------------------------

    def add_habit(self, name: str) -> Habit:
        try:
            habit = self._habits.add_habit(name)
        except ValidationError as e:
            self._rejected(e)
            raise
        self._save_habits()
        self._audit_logger.log_habit_added(habit.id, habit.name)
        return habit

    def mark_done(self, habit_id: str) -> Optional[Habit]:
        habit = self._habits.mark_done(habit_id)
        if habit is None:
            return None
        self._save_habits()
        self._save_log()
        self._audit_logger.log_habit_completed(
            habit.id, habit.name, habit.last_done, habit.streak
        )
        return habit

    def reset_habit(self, habit_id: str) -> Optional[Habit]:
        existing = self._habits.get(habit_id)
        if existing is None:
            return None
        previous_streak = existing.streak
        habit = self._habits.reset_habit(habit_id)
        self._save_habits()
        self._audit_logger.log_habit_reset(habit.id, habit.name, previous_streak)
        return habit

    def delete_habit(self, habit_id: str) -> Optional[Habit]:
        result = self._habits.delete_habit(habit_id)
        if result is None:
            return None
        habit, purged_days = result
        self._save_habits()
        self._save_log()
        self._audit_logger.log_habit_deleted(habit.id, habit.name, purged_days)
        return habit

    def toggle_on_date(self, name: str, day: str) -> Optional[bool]:
        try:
            done = self._habits.toggle_on_date(name, day)
        except ValidationError as e:
            self._rejected(e)
            raise
        if done is None:
            return None
        self._save_log()
        if day == self._today():
            self._save_habits()
        self._audit_logger.log_habit_toggled(name, day, done)
        return done

    def is_done_today(self, habit_id: str) -> bool:
        return self._habits.is_done_today(habit_id)

    def week_view(self, habit_id: str, day: Optional[str] = None) -> list[WeekDay]:
        return self._habits.week_view(habit_id, day)

    # -------------------------------------------------------------------------
    # Ledger and budget
    # -------------------------------------------------------------------------

    def add_entry(self, kind, description: str, amount) -> FinanceEntry:
        try:
            entry = self._finance.add_entry(kind, description, amount)
        except ValidationError as e:
            self._rejected(e)
            raise
        self._repository.save_finances(self._finance.entries)
        self._audit_logger.log_entry_added(
            entry.id, entry.kind.value, str(entry.amount), entry.date
        )
        return entry

    def delete_entry(self, entry_id: str) -> Optional[FinanceEntry]:
        entry = self._finance.delete_entry(entry_id)
        if entry is None:
            return None
        self._repository.save_finances(self._finance.entries)
        self._audit_logger.log_entry_deleted(entry.id)
        return entry

    def entries_newest_first(self) -> list[FinanceEntry]:
        return self._finance.entries_newest_first()

    def daily_expense_total(self, day: str) -> Decimal:
        return self._finance.daily_expense_total(day)

    def monthly_totals(self, prefix: str) -> MonthlyTotals:
        return self._finance.monthly_totals(prefix)

    def finance_summary(self) -> FinanceSummary:
        return self._finance.summary()

    def summary_text(self) -> str:
        """The line shown above the ledger."""
        return self.finance_summary().describe(self._currency_symbol)

    def save_budget(self, value) -> Optional[Decimal]:
        """
        Store the monthly budget from form input.

        Empty, non-numeric or non-positive input clears it.
        """
        self._budget = parse_budget(value)
        self._repository.save_budget(self._budget)
        self._audit_logger.log_budget_saved(
            None if self._budget is None else str(self._budget)
        )
        return self._budget

    def budget_status(self) -> BudgetStatus:
        """This month's spending against the saved budget."""
        return self._finance.current_budget_status(self._budget)

    def budget_text(self) -> str:
        """Budget banner text; empty when no budget is set."""
        return self.budget_status().describe(self._currency_symbol)

    # -------------------------------------------------------------------------
    # Calendar
    # -------------------------------------------------------------------------

    def day_detail(self, day: str) -> DayDetail:
        return self._calendar.day_detail(day)

    def month_view(self, prefix: Optional[str] = None) -> CalendarMonth:
        return self._calendar.month_view(prefix)

    def adjacent_month(self, prefix: str, step: int) -> str:
        return self._calendar.adjacent_month(prefix, step)


def create_store(settings: Optional[Settings] = None) -> KeyValueStoreInterface:
    """Build the configured store backend."""
    settings = settings or get_settings()
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryStore()
    return JsonFileStore(storage.data_dir)


def create_tracker(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStoreInterface] = None,
    today: Optional[Callable[[], str]] = None,
) -> PersonalTracker:
    """
    Factory function to create a ready-to-use tracker.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        store: Store to use instead of the configured backend
        today: Day provider to use instead of the configured time zone's clock

    Returns:
        A PersonalTracker loaded from the store
    """
    settings = settings or get_settings()
    app = settings.app
    configure_logging("DEBUG" if app.debug_mode else app.log_level)

    tracker_settings = settings.tracker
    audit_logger = AuditLogger()
    repository = TrackerRepository(store or create_store(settings), audit_logger)
    if today is None:
        today = partial(today_in, tracker_settings.timezone)

    return PersonalTracker(
        repository,
        today,
        audit_logger,
        currency_symbol=tracker_settings.currency_symbol,
    )

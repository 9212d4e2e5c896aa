"""Domain engines: habits, ledger and the calendar view over both."""

from personal_tracker.engines.calendar import CalendarAggregator
from personal_tracker.engines.finance import FinanceEngine, budget_status
from personal_tracker.engines.habits import HabitEngine

__all__ = [
    "CalendarAggregator",
    "FinanceEngine",
    "HabitEngine",
    "budget_status",
]

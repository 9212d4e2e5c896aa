"""
Calendar Aggregator

Read-only view over both engines, per calendar day. It holds no state of
its own and caches nothing: every call reads the engines as they are now.
"""

from typing import Callable, Optional

from personal_tracker.dates import (
    month_days,
    month_prefix,
    month_title,
    shift_month,
    sunday_offset,
)
from personal_tracker.engines.finance import FinanceEngine
from personal_tracker.engines.habits import HabitEngine
from personal_tracker.models.calendar import CalendarDay, CalendarMonth, DayDetail


class CalendarAggregator:
    """Composes habit log and ledger figures per day."""

    def __init__(
        self,
        habits: HabitEngine,
        finance: FinanceEngine,
        today: Callable[[], str],
    ):
        self._habits = habits
        self._finance = finance
        self._today = today

    def day_detail(self, day: str) -> DayDetail:
        """Habits done, money spent and money earned on ``day``."""
        return DayDetail(
            date=day,
            habits_done=self._habits.completion_log.entries_on(day),
            expense_total=self._finance.daily_expense_total(day),
            income_total=self._finance.daily_income_total(day),
        )

    def current_month(self) -> str:
        return month_prefix(self._today())

    def adjacent_month(self, prefix: str, step: int) -> str:
        """Month navigation: step -1 for previous, +1 for next."""
        return shift_month(prefix, step)

    def month_view(self, prefix: Optional[str] = None) -> CalendarMonth:
        """Every day of a month (default: this month) with its figures."""
        prefix = prefix or self.current_month()
        today = self._today()
        days = []
        for day in month_days(prefix):
            detail = self.day_detail(day)
            days.append(CalendarDay(
                date=day,
                day=int(day[8:]),
                habit_count=detail.habit_count,
                expense_total=detail.expense_total,
                income_total=detail.income_total,
                is_today=day == today,
            ))
        return CalendarMonth(
            month=prefix,
            title=month_title(prefix),
            leading_blanks=sunday_offset(prefix),
            days=days,
        )

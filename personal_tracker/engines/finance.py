"""
Finance Engine

Owns the ledger and derives every figure from it on demand: daily totals,
month totals, the summary line and the budget status. Nothing derived is
cached, so a delete is reflected immediately everywhere.

All sums are Decimal. A month is matched by its YYYY-MM prefix.
"""

from decimal import Decimal
from typing import Callable, Iterable, Optional

from personal_tracker.dates import month_prefix
from personal_tracker.models.finance import (
    BudgetStatus,
    EntryKind,
    FinanceEntry,
    FinanceSummary,
    MonthlyTotals,
)
from personal_tracker.validation import parse_amount, require_valid, validate_entry


ZERO = Decimal("0")


def budget_status(budget: Optional[Decimal], monthly_expense_total: Decimal) -> BudgetStatus:
    """
    Classify a month's spending against an optional budget.

    Spending exactly the budget is still within it.
    """
    if budget is None:
        return BudgetStatus.unset(spent=monthly_expense_total)
    if monthly_expense_total > budget:
        return BudgetStatus.exceeded(budget, monthly_expense_total)
    return BudgetStatus.within_budget(budget, monthly_expense_total)


class FinanceEngine:
    """Expense and income ledger."""

    def __init__(self, entries: Iterable[FinanceEntry], today: Callable[[], str]):
        self._entries: list[FinanceEntry] = list(entries)
        self._today = today

    @property
    def entries(self) -> list[FinanceEntry]:
        """Entries in the order they were recorded."""
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[FinanceEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def entries_newest_first(self) -> list[FinanceEntry]:
        """Listing order: latest day first, recording order within a day."""
        return sorted(self._entries, key=lambda e: e.date, reverse=True)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_entry(self, kind, description: str, amount) -> FinanceEntry:
        """
        Record an expense or income dated today.

        Raises:
            ValidationError: blank description, amount that is not a
                             positive finite number, or unknown kind
        """
        require_valid(validate_entry(kind, description, amount))
        entry = FinanceEntry(
            kind=EntryKind(kind),
            description=description.strip(),
            amount=parse_amount(amount),
            date=self._today(),
        )
        self._entries.append(entry)
        return entry

    def delete_entry(self, entry_id: str) -> Optional[FinanceEntry]:
        """Remove an entry. Returns it, or None if there was no such entry."""
        entry = self.get(entry_id)
        if entry is None:
            return None
        self._entries = [e for e in self._entries if e.id != entry_id]
        return entry

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def _sum(self, kind: EntryKind, matches: Callable[[FinanceEntry], bool]) -> Decimal:
        return sum(
            (e.amount for e in self._entries if e.kind == kind and matches(e)),
            ZERO,
        )

    def daily_expense_total(self, day: str) -> Decimal:
        return self._sum(EntryKind.EXPENSE, lambda e: e.date == day)

    def daily_income_total(self, day: str) -> Decimal:
        return self._sum(EntryKind.INCOME, lambda e: e.date == day)

    def monthly_totals(self, prefix: str) -> MonthlyTotals:
        """Income and expense for entries whose date starts with ``prefix``."""
        in_month = lambda e: e.date.startswith(prefix)  # noqa: E731
        return MonthlyTotals(
            month=prefix,
            income=self._sum(EntryKind.INCOME, in_month),
            expense=self._sum(EntryKind.EXPENSE, in_month),
        )

    def summary(self) -> FinanceSummary:
        """Today's spending and the current month's totals."""
        today = self._today()
        return FinanceSummary(
            today=today,
            today_spent=self.daily_expense_total(today),
            month_totals=self.monthly_totals(month_prefix(today)),
        )

    def budget_status(
        self,
        budget: Optional[Decimal],
        monthly_expense_total: Decimal,
    ) -> BudgetStatus:
        return budget_status(budget, monthly_expense_total)

    def current_budget_status(self, budget: Optional[Decimal]) -> BudgetStatus:
        """Budget status for the month containing today."""
        spent = self.monthly_totals(month_prefix(self._today())).expense
        return budget_status(budget, spent)

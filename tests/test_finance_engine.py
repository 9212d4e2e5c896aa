"""Tests for the finance engine and input parsing."""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from personal_tracker.engines.finance import FinanceEngine, budget_status
from personal_tracker.models.finance import BudgetState, EntryKind, FinanceEntry
from personal_tracker.validation import ValidationError, parse_amount, parse_budget


@pytest.fixture
def engine(clock):
    return FinanceEngine([], clock)


def entry(kind: str, amount: str, day: str, description: str = "x") -> FinanceEntry:
    return FinanceEntry(kind=kind, description=description, amount=Decimal(amount), date=day)


class TestAddEntry:
    """Tests for add_entry validation and stamping."""

    def test_add_expense(self, engine, clock):
        """Test a valid expense is dated today."""
        e = engine.add_entry("expense", "Tea", 5)
        assert e.kind == EntryKind.EXPENSE
        assert e.description == "Tea"
        assert e.amount == Decimal("5")
        assert e.date == clock.day
        assert engine.entries == [e]

    def test_add_income_from_form_strings(self, engine):
        """Test string amounts from a form are accepted."""
        e = engine.add_entry("income", "  Salary ", " 1000.50 ")
        assert e.description == "Salary"
        assert e.amount == Decimal("1000.50")

    def test_blank_description(self, engine):
        """Test whitespace-only descriptions fail."""
        with pytest.raises(ValidationError):
            engine.add_entry("expense", "  ", 10)
        assert engine.entries == []

    def test_negative_amount(self, engine):
        """Test negative amounts fail."""
        with pytest.raises(ValidationError, match="greater than zero"):
            engine.add_entry("expense", "Tea", -5)

    @pytest.mark.parametrize("amount", [0, "0", "abc", "", None, "nan", "inf", float("inf"), True])
    def test_invalid_amounts(self, engine, amount):
        """Test zero, non-numeric and non-finite amounts fail."""
        with pytest.raises(ValidationError):
            engine.add_entry("expense", "Tea", amount)
        assert engine.entries == []

    @pytest.mark.parametrize("amount", [
        "1e-400",
        "1e5000",
        "1e999999999",
        "0.1000000000000000055511151231257827",
    ])
    def test_unstorable_amounts(self, engine, amount):
        """Test amounts that would not survive storage are rejected up front."""
        with pytest.raises(ValidationError, match="out of range or has too many digits"):
            engine.add_entry("expense", "Dust", amount)
        assert engine.entries == []

    @pytest.mark.parametrize("amount", ["1_000", "0x10", "1,000", "١٢"])
    def test_non_plain_number_strings(self, engine, amount):
        """Test only plain decimal or exponent notation is accepted."""
        with pytest.raises(ValidationError, match="must be a number"):
            engine.add_entry("expense", "Tea", amount)

    def test_exponent_notation_accepted(self, engine):
        """Test exponent notation is a number, as in a browser form."""
        assert engine.add_entry("expense", "Tea", "1.5e2").amount == Decimal("150")

    def test_unknown_kind(self, engine):
        """Test only expense and income are accepted."""
        with pytest.raises(ValidationError):
            engine.add_entry("gift", "Tea", 5)

    def test_all_problems_reported_together(self, engine):
        """Test one notice lists every issue."""
        with pytest.raises(ValidationError) as exc_info:
            engine.add_entry("expense", "", "abc")
        fields = {issue.field for issue in exc_info.value.issues}
        assert fields == {"description", "amount"}
        assert "Please fix the following" in str(exc_info.value)


class TestDeleteEntry:
    """Tests for delete_entry."""

    def test_delete(self, engine):
        """Test an entry can be removed by id."""
        e = engine.add_entry("expense", "Tea", 5)
        assert engine.delete_entry(e.id) == e
        assert engine.entries == []

    def test_delete_unknown_id(self, engine):
        """Test unknown ids are ignored."""
        engine.add_entry("expense", "Tea", 5)
        assert engine.delete_entry("missing") is None
        assert len(engine.entries) == 1


class TestAggregates:
    """Tests for daily and monthly totals."""

    def test_monthly_totals(self, clock):
        """Test [income 1000, expense 200, expense 300] gives (1000, 500), net 500."""
        engine = FinanceEngine([
            entry("income", "1000", "2026-10-01"),
            entry("expense", "200", "2026-10-05"),
            entry("expense", "300", "2026-10-19"),
            entry("expense", "999", "2026-09-30"),
        ], clock)
        totals = engine.monthly_totals("2026-10")
        assert totals.income == Decimal("1000")
        assert totals.expense == Decimal("500")
        assert totals.net == Decimal("500")

    def test_monthly_totals_empty_month(self, engine):
        """Test a month without entries sums to zero."""
        totals = engine.monthly_totals("2020-01")
        assert totals.income == 0
        assert totals.expense == 0

    def test_daily_totals(self, clock):
        """Test per-day sums by kind."""
        engine = FinanceEngine([
            entry("expense", "2.25", "2026-10-19"),
            entry("expense", "0.75", "2026-10-19"),
            entry("income", "50", "2026-10-19"),
            entry("expense", "10", "2026-10-18"),
        ], clock)
        assert engine.daily_expense_total("2026-10-19") == Decimal("3.00")
        assert engine.daily_income_total("2026-10-19") == Decimal("50")
        assert engine.daily_expense_total("2026-10-17") == 0

    def test_decimal_sums_are_exact(self, engine):
        """Test ten 0.1 expenses sum to exactly 1."""
        for _ in range(10):
            engine.add_entry("expense", "Gum", 0.1)
        assert engine.monthly_totals("2026-10").expense == Decimal("1")

    def test_summary(self, engine, clock):
        """Test today's spending and month totals."""
        engine.add_entry("expense", "Tea", 5)
        engine.add_entry("income", "Refund", 2)
        summary = engine.summary()
        assert summary.today == clock.day
        assert summary.today_spent == Decimal("5")
        assert summary.month_totals.net == Decimal("-3")

    def test_entries_newest_first(self, clock):
        """Test listing order: latest day first, same-day entries kept in order."""
        a = entry("expense", "1", "2026-10-01", "a")
        b = entry("expense", "1", "2026-10-19", "b")
        c = entry("expense", "1", "2026-10-05", "c")
        d = entry("expense", "1", "2026-10-19", "d")
        engine = FinanceEngine([a, b, c, d], clock)
        assert [e.description for e in engine.entries_newest_first()] == ["b", "d", "c", "a"]


class TestBudget:
    """Tests for budget status and parsing."""

    def test_exceeded(self):
        """Test budget 400, spent 500 -> exceeded by 100."""
        status = budget_status(Decimal("400"), Decimal("500"))
        assert status.state == BudgetState.EXCEEDED
        assert status.over_by == Decimal("100")

    def test_within_budget(self):
        """Test budget 400, spent 300 -> 100 remaining."""
        status = budget_status(Decimal("400"), Decimal("300"))
        assert status.state == BudgetState.WITHIN_BUDGET
        assert status.remaining == Decimal("100")

    def test_exactly_at_budget_is_within(self):
        """Test spending equal to the budget does not exceed it."""
        status = budget_status(Decimal("400"), Decimal("400"))
        assert status.state == BudgetState.WITHIN_BUDGET
        assert status.remaining == 0

    def test_unset(self):
        """Test no budget gives Unset whatever was spent."""
        assert budget_status(None, Decimal("123")).state == BudgetState.UNSET

    def test_current_budget_status(self, engine):
        """Test the current month is used."""
        engine.add_entry("expense", "Rent", 450)
        assert engine.current_budget_status(Decimal("400")).over_by == Decimal("50")

    @pytest.mark.parametrize("value", ["", "  ", "abc", "0", "-3", None, 0, -1])
    def test_parse_budget_clears(self, value):
        """Test empty, non-numeric or non-positive budgets mean no budget."""
        assert parse_budget(value) is None

    def test_parse_budget_value(self):
        """Test a positive budget is kept as Decimal."""
        assert parse_budget("250.5") == Decimal("250.5")
        assert parse_budget(400) == Decimal("400")

    def test_parse_amount(self):
        """Test amounts are read without float drift."""
        assert parse_amount(0.1) == Decimal("0.1")
        assert parse_amount("12") == Decimal("12")
        assert parse_amount(False) is None

    @pytest.mark.parametrize("value", ["1e-400", "1e5000", "1_000"])
    def test_parse_budget_unstorable_clears(self, value):
        """Test budgets that cannot be stored or are not plain numbers clear."""
        assert parse_budget(value) is None

    def test_entry_model_rejects_unstorable_amount(self):
        """Test the model itself refuses amounts that would underflow to 0."""
        with pytest.raises(PydanticValidationError):
            entry("expense", "1e-400", "2026-10-19")

    def test_parse_amount_rejects_underscores(self):
        """Test digit separators are not part of a number."""
        assert parse_amount("1_000") is None
        assert parse_amount(" 1000 ") == Decimal("1000")


class TestDisplayText:
    """Tests for the summary line and budget banner text."""

    def test_summary_text(self, engine):
        """Test the ledger summary line."""
        engine.add_entry("expense", "Tea", 5)
        engine.add_entry("income", "Refund", "2.5")
        assert engine.summary().describe("₹") == (
            "Today Spent: ₹5.00 | Month: Income ₹2.50, Spent ₹5.00 | Net: ₹-2.50"
        )

    def test_budget_text_within(self):
        """Test the banner for a month within budget."""
        status = budget_status(Decimal("400"), Decimal("300"))
        assert status.describe("$") == "Budget: $400.00 | Spent: $300.00 | Remaining: $100.00"

    def test_budget_text_exceeded(self):
        """Test the warning banner."""
        status = budget_status(Decimal("400"), Decimal("500.5"))
        assert status.describe("₹") == "⚠ Budget Exceeded! Limit ₹400.00 | Spent ₹500.50"

    def test_budget_text_unset(self):
        """Test no banner without a budget."""
        assert budget_status(None, Decimal("5")).describe("₹") == ""



if __name__ == "__main__":
    pytest.main([__file__, "-v"])

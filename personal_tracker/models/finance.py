"""
Finance Models for Personal Tracker

These models define the ledger entries and every figure derived from them.

DESIGN DECISION: Amounts are Decimal in memory (no float drift when summing
a month of tea purchases) but travel as plain JSON numbers, which is what
the persisted "finances" records have always held.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from personal_tracker.dates import is_day
from personal_tracker.models.habit import new_id


def to_decimal(value) -> Decimal:
    """
    Convert a stored or user-supplied number to Decimal.

    Floats go through their shortest repr so 0.1 stays 0.1.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def to_json_number(value: Decimal):
    """Integral amounts serialize as int, the rest as float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def is_storable(value: Decimal) -> bool:
    """
    True when ``value`` comes back unchanged from its JSON number form.

    Rules out amounts that underflow to 0.0, overflow a float, or carry
    more digits than a float keeps.
    """
    if not value.is_finite():
        return False
    # float() first: int() of a huge exponent would build the whole integer
    if math.isinf(float(value)):
        return False
    return to_decimal(to_json_number(value)) == value


def format_money(amount: Decimal, symbol: str) -> str:
    """Two-decimal display form, e.g. ``₹12.50`` or ``₹-3.00``."""
    return f"{symbol}{amount:.2f}"


# =============================================================================
# ENUMS
# =============================================================================

class EntryKind(str, Enum):
    """Direction of money for a ledger entry."""
    EXPENSE = "expense"
    INCOME = "income"


class BudgetState(str, Enum):
    """Where this month's spending stands against the budget."""
    UNSET = "unset"                  # No budget configured
    WITHIN_BUDGET = "within_budget"  # Spent <= budget
    EXCEEDED = "exceeded"            # Spent > budget


# =============================================================================
# LEDGER ENTRY
# =============================================================================

class FinanceEntry(BaseModel):
    """
    A single expense or income.

    Persisted as {id, type, desc, amount, dateISO}.
    Entries are created once and deleted; they are never edited.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    kind: EntryKind = Field(
        ...,
        alias="type",
        description="expense or income"
    )
    description: str = Field(
        ...,
        min_length=1,
        alias="desc",
        description="What the money was for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive magnitude, currency agnostic"
    )
    date: str = Field(
        ...,
        alias="dateISO",
        description="Day the entry was recorded (YYYY-MM-DD)"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount(cls, v):
        if isinstance(v, float):
            return to_decimal(v)
        return v

    @field_validator('amount')
    @classmethod
    def validate_amount_storable(cls, v: Decimal) -> Decimal:
        if not is_storable(v):
            raise ValueError(f"amount {v} cannot be stored as a JSON number")
        return v

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: str) -> str:
        if not is_day(v):
            raise ValueError(f"dateISO must be a YYYY-MM-DD day, got {v!r}")
        return v

    @field_serializer('amount')
    def serialize_amount(self, v: Decimal):
        return to_json_number(v)

    @property
    def is_expense(self) -> bool:
        return self.kind == EntryKind.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind == EntryKind.INCOME

    def to_record(self) -> dict:
        """Wire form used by the store."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# DERIVED FIGURES
# =============================================================================

class MonthlyTotals(BaseModel):
    """Income and expense for one YYYY-MM bucket."""

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month prefix, YYYY-MM"
    )
    income: Decimal = Field(default=Decimal("0"))
    expense: Decimal = Field(default=Decimal("0"))

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class FinanceSummary(BaseModel):
    """Headline numbers shown above the ledger."""

    today: str
    today_spent: Decimal
    month_totals: MonthlyTotals

    def describe(self, symbol: str) -> str:
        totals = self.month_totals
        return (
            f"Today Spent: {format_money(self.today_spent, symbol)} | "
            f"Month: Income {format_money(totals.income, symbol)}, "
            f"Spent {format_money(totals.expense, symbol)} | "
            f"Net: {format_money(totals.net, symbol)}"
        )


class BudgetStatus(BaseModel):
    """
    This month's spending classified against the optional budget.

    Exactly one of remaining / over_by is set unless the state is UNSET.
    """

    state: BudgetState
    budget: Optional[Decimal] = None
    spent: Decimal = Field(default=Decimal("0"))
    remaining: Optional[Decimal] = None
    over_by: Optional[Decimal] = None

    @classmethod
    def unset(cls, spent: Decimal = Decimal("0")) -> 'BudgetStatus':
        return cls(state=BudgetState.UNSET, spent=spent)

    @classmethod
    def within_budget(cls, budget: Decimal, spent: Decimal) -> 'BudgetStatus':
        return cls(
            state=BudgetState.WITHIN_BUDGET,
            budget=budget,
            spent=spent,
            remaining=budget - spent,
        )

    @classmethod
    def exceeded(cls, budget: Decimal, spent: Decimal) -> 'BudgetStatus':
        return cls(
            state=BudgetState.EXCEEDED,
            budget=budget,
            spent=spent,
            over_by=spent - budget,
        )

    @property
    def is_exceeded(self) -> bool:
        return self.state == BudgetState.EXCEEDED

    def describe(self, symbol: str) -> str:
        """
        Budget banner text. Empty when no budget is set (banner hidden).
        """
        if self.state == BudgetState.UNSET:
            return ""
        if self.state == BudgetState.EXCEEDED:
            return (
                f"⚠ Budget Exceeded! Limit {format_money(self.budget, symbol)} | "
                f"Spent {format_money(self.spent, symbol)}"
            )
        return (
            f"Budget: {format_money(self.budget, symbol)} | "
            f"Spent: {format_money(self.spent, symbol)} | "
            f"Remaining: {format_money(self.remaining, symbol)}"
        )

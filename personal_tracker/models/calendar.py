"""
Calendar Read Models

Pure views assembled from the habit log and the ledger. Nothing here is
stored; every instance is rebuilt on demand.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class DayDetail(BaseModel):
    """What happened on one day."""

    date: str
    habits_done: list[str] = Field(default_factory=list)
    expense_total: Decimal = Field(default=Decimal("0"))
    income_total: Decimal = Field(default=Decimal("0"))

    @property
    def habit_count(self) -> int:
        return len(self.habits_done)


class CalendarDay(BaseModel):
    """One cell of the month grid."""

    date: str
    day: int = Field(ge=1, le=31)
    habit_count: int = Field(default=0, ge=0)
    expense_total: Decimal = Field(default=Decimal("0"))
    income_total: Decimal = Field(default=Decimal("0"))
    is_today: bool = False


class CalendarMonth(BaseModel):
    """
    A month laid out for a Sunday-first grid.

    leading_blanks is the number of empty cells before the 1st.
    """

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    title: str
    leading_blanks: int = Field(ge=0, le=6)
    days: list[CalendarDay] = Field(default_factory=list)

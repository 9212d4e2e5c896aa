"""
Persisted Tracker State

The whole tracker is four independently keyed records in the store:

    activities     -> [{id, name, streak, lastDone}, ...]
    finances       -> [{id, type, desc, amount, dateISO}, ...]
    habitLogs      -> {"YYYY-MM-DD": [habitName, ...]}
    monthlyBudget  -> positive number or null

TrackerSnapshot holds all four so the state can be moved in and out of
the engines (and compared in tests) as one value.
"""

from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from personal_tracker.dates import is_day
from personal_tracker.models.finance import (
    FinanceEntry,
    is_storable,
    to_decimal,
    to_json_number,
)
from personal_tracker.models.habit import Habit


ACTIVITIES_KEY = "activities"
FINANCES_KEY = "finances"
HABIT_LOGS_KEY = "habitLogs"
MONTHLY_BUDGET_KEY = "monthlyBudget"

STATE_KEYS = (ACTIVITIES_KEY, FINANCES_KEY, HABIT_LOGS_KEY, MONTHLY_BUDGET_KEY)


class TrackerSnapshot(BaseModel):
    """Full tracker state, using the store's key names as aliases."""
    model_config = ConfigDict(populate_by_name=True)

    activities: list[Habit] = Field(default_factory=list)
    finances: list[FinanceEntry] = Field(default_factory=list)
    habit_logs: dict[str, list[str]] = Field(
        default_factory=dict,
        alias=HABIT_LOGS_KEY,
    )
    monthly_budget: Optional[Decimal] = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        alias=MONTHLY_BUDGET_KEY,
    )

    @field_validator('habit_logs')
    @classmethod
    def validate_habit_logs(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        bad = [day for day in v if not is_day(day)]
        if bad:
            raise ValueError(f"habitLogs keys must be YYYY-MM-DD days: {bad}")
        return v

    @field_validator('monthly_budget', mode='before')
    @classmethod
    def coerce_budget(cls, v):
        if isinstance(v, float):
            return to_decimal(v)
        return v

    @field_validator('monthly_budget')
    @classmethod
    def validate_budget_storable(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and not is_storable(v):
            raise ValueError(f"monthlyBudget {v} cannot be stored as a JSON number")
        return v

    @field_serializer('monthly_budget')
    def serialize_budget(self, v: Optional[Decimal]):
        return None if v is None else to_json_number(v)

    def to_wire(self) -> dict:
        """Map of store key -> JSON-ready value."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, data: dict) -> 'TrackerSnapshot':
        return cls.model_validate(data)

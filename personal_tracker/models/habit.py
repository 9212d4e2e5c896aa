"""
Habit Models for Personal Tracker

A habit is a named daily practice with a running streak. The completion
log is the independent per-day history of which habits were done.

DESIGN DECISION: The streak invariant (streak == 0 exactly when the habit
has never been done, or was reset) is checked when a Habit is built, and
every mutation goes through a method that sets streak and last_done
together. There is no way to leave a Habit half-updated.
"""

from typing import Iterable, Iterator, Mapping, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from personal_tracker.dates import is_day


def new_id() -> str:
    """Fresh opaque identifier for habits and finance entries."""
    return str(uuid4())


class Habit(BaseModel):
    """
    A tracked habit.

    Persisted as {id, name, streak, lastDone}.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier, never changes"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name, unique ignoring case"
    )
    streak: int = Field(
        default=0,
        ge=0,
        description="Consecutive completed days ending at last_done"
    )
    last_done: Optional[str] = Field(
        default=None,
        alias="lastDone",
        description="Day the habit was last completed (YYYY-MM-DD)"
    )

    @field_validator('last_done')
    @classmethod
    def validate_last_done(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_day(v):
            raise ValueError(f"lastDone must be a YYYY-MM-DD day, got {v!r}")
        return v

    @model_validator(mode='after')
    def validate_streak(self) -> 'Habit':
        """streak is zero exactly when last_done is unset."""
        if (self.streak == 0) != (self.last_done is None):
            raise ValueError(
                "Habit streak must be 0 if and only if lastDone is null "
                f"(streak={self.streak}, lastDone={self.last_done})"
            )
        return self

    @property
    def is_fresh(self) -> bool:
        return self.last_done is None

    def record_completion(self, day: str, streak: int) -> None:
        """Set the streak and the day it ends on in one step."""
        if streak < 1:
            raise ValueError("A completed habit has a streak of at least 1")
        self.streak = streak
        self.last_done = day

    def clear_streak(self) -> None:
        self.streak = 0
        self.last_done = None

    def to_record(self) -> dict:
        """Wire form used by the store."""
        return self.model_dump(mode="json", by_alias=True)


class WeekDay(BaseModel):
    """One cell of a habit's Monday-first week strip."""

    date: str
    label: str
    done: bool


class CompletionLog:
    """
    Per-day record of which habits were completed.

    Maps a day identifier to an ordered, duplicate-free list of habit keys.
    A day is never kept with an empty list: removing the last key from a
    day deletes the day.

    The log does not know what a key is. HabitEngine decides that
    (currently the habit name).
    """

    def __init__(self, days: Optional[Mapping[str, Iterable[str]]] = None):
        self._days: dict[str, list[str]] = {}
        for day, keys in (days or {}).items():
            for key in keys:
                self.add(day, key)

    def __contains__(self, day: str) -> bool:
        return day in self._days

    def __iter__(self) -> Iterator[str]:
        return iter(self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CompletionLog):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"CompletionLog({self._days!r})"

    def entries_on(self, day: str) -> list[str]:
        """Keys completed on ``day`` (a copy; empty when the day is absent)."""
        return list(self._days.get(day, []))

    def has(self, day: str, key: str) -> bool:
        return key in self._days.get(day, ())

    def add(self, day: str, key: str) -> bool:
        """Add ``key`` to ``day``. Returns False if it was already there."""
        keys = self._days.setdefault(day, [])
        if key in keys:
            return False
        keys.append(key)
        return True

    def remove(self, day: str, key: str) -> bool:
        """Remove ``key`` from ``day``. Returns False if it was not there."""
        keys = self._days.get(day)
        if not keys or key not in keys:
            return False
        keys.remove(key)
        if not keys:
            del self._days[day]
        return True

    def toggle(self, day: str, key: str) -> bool:
        """Flip membership. Returns True if ``key`` is now present."""
        if self.remove(day, key):
            return False
        self.add(day, key)
        return True

    def purge(self, key: str) -> list[str]:
        """Remove ``key`` from every day. Returns the days it was removed from."""
        touched = [day for day, keys in self._days.items() if key in keys]
        for day in touched:
            self.remove(day, key)
        return touched

    def to_dict(self) -> dict[str, list[str]]:
        return {day: list(keys) for day, keys in self._days.items()}

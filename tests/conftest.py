"""Shared fixtures: a movable clock and an in-memory store."""

import pytest

from personal_tracker.dates import shift_day
from personal_tracker.services.storage import InMemoryStore


class FakeClock:
    """Day provider that only moves when told to."""

    def __init__(self, day: str = "2026-10-19"):
        self.day = day

    def __call__(self) -> str:
        return self.day

    def advance(self, days: int = 1) -> str:
        self.day = shift_day(self.day, days)
        return self.day


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()

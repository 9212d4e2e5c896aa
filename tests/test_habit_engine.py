"""Tests for the habit engine: streaks, log consistency, toggles."""

import pytest

from personal_tracker.engines.habits import HabitEngine
from personal_tracker.models.habit import CompletionLog, Habit
from personal_tracker.validation import ValidationError


@pytest.fixture
def engine(clock):
    return HabitEngine([], CompletionLog(), clock)


def assert_streak_invariant(engine: HabitEngine) -> None:
    for habit in engine.habits:
        assert (habit.streak == 0) == (habit.last_done is None)


class TestAddHabit:
    """Tests for add_habit."""

    def test_add_habit(self, engine):
        """Test a new habit has no streak."""
        habit = engine.add_habit("  Gym ")
        assert habit.name == "Gym"
        assert habit.streak == 0
        assert habit.last_done is None
        assert engine.habits == [habit]

    def test_duplicate_name_ignoring_case(self, engine):
        """Test 'gym' collides with 'Gym'."""
        engine.add_habit("Gym")
        with pytest.raises(ValidationError, match="already exists"):
            engine.add_habit("gym")
        assert len(engine.habits) == 1

    def test_empty_name(self, engine):
        """Test blank names are rejected without side effects."""
        with pytest.raises(ValidationError) as exc_info:
            engine.add_habit("   ")
        assert exc_info.value.issues[0].issue_type == "missing"
        assert engine.habits == []

    def test_ids_are_unique(self, engine):
        """Test each habit gets a fresh id."""
        a = engine.add_habit("Gym")
        b = engine.add_habit("Read")
        assert a.id != b.id


class TestMarkDone:
    """Tests for mark_done streak rules."""

    def test_first_completion(self, engine, clock):
        """Test the first completion starts a streak of 1 and logs today."""
        habit = engine.add_habit("Gym")
        assert engine.mark_done(habit.id) is habit
        assert habit.streak == 1
        assert habit.last_done == clock.day
        assert engine.completion_log.entries_on(clock.day) == ["Gym"]

    def test_consecutive_days(self, engine, clock):
        """Test D, D+1, D+2 yields streaks 1, 2, 3."""
        habit = engine.add_habit("Gym")
        streaks = []
        for _ in range(3):
            engine.mark_done(habit.id)
            streaks.append(habit.streak)
            clock.advance()
        assert streaks == [1, 2, 3]

    def test_gap_resets_to_one(self, engine, clock):
        """Test D then D+3 restarts the streak."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        clock.advance()
        engine.mark_done(habit.id)
        assert habit.streak == 2
        clock.advance(3)
        engine.mark_done(habit.id)
        assert habit.streak == 1
        assert habit.last_done == clock.day

    def test_same_day_is_idempotent(self, engine, clock):
        """Test a second call on the same day changes nothing."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        before = (habit.streak, habit.last_done, engine.completion_log.to_dict())
        assert engine.mark_done(habit.id) is None
        assert (habit.streak, habit.last_done, engine.completion_log.to_dict()) == before

    def test_unknown_id_is_noop(self, engine):
        """Test unknown ids are ignored."""
        assert engine.mark_done("missing") is None
        assert len(engine.completion_log) == 0

    def test_invariant_holds_throughout(self, engine, clock):
        """Test streak == 0 iff lastDone is None after every operation."""
        gym = engine.add_habit("Gym")
        read = engine.add_habit("Read")
        assert_streak_invariant(engine)
        engine.mark_done(gym.id)
        assert_streak_invariant(engine)
        clock.advance()
        engine.toggle_on_date("Read", clock.day)
        assert_streak_invariant(engine)
        engine.reset_habit(gym.id)
        assert_streak_invariant(engine)
        engine.toggle_on_date("Read", clock.day)
        assert_streak_invariant(engine)
        engine.delete_habit(read.id)
        assert_streak_invariant(engine)

    def test_is_done_today(self, engine, clock):
        """Test the done-today flag follows the clock."""
        habit = engine.add_habit("Gym")
        assert not engine.is_done_today(habit.id)
        engine.mark_done(habit.id)
        assert engine.is_done_today(habit.id)
        clock.advance()
        assert not engine.is_done_today(habit.id)


class TestResetAndDelete:
    """Tests for reset_habit and delete_habit."""

    def test_reset_keeps_history(self, engine, clock):
        """Test reset clears the streak but not the log."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        engine.reset_habit(habit.id)
        assert habit.streak == 0
        assert habit.last_done is None
        assert engine.completion_log.entries_on(clock.day) == ["Gym"]

    def test_mark_done_after_reset_starts_at_one(self, engine, clock):
        """Test a reset habit behaves like a fresh one."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        engine.reset_habit(habit.id)
        clock.advance()
        engine.mark_done(habit.id)
        assert habit.streak == 1

    def test_reset_unknown_id(self, engine):
        """Test unknown ids are ignored."""
        assert engine.reset_habit("missing") is None

    def test_delete_purges_every_day(self, engine, clock):
        """Test no day keeps the deleted name, and emptied days vanish."""
        gym = engine.add_habit("Gym")
        engine.add_habit("Read")
        engine.mark_done(gym.id)
        engine.toggle_on_date("Read", clock.day)
        engine.toggle_on_date("Gym", "2026-10-01")
        engine.toggle_on_date("Gym", "2026-10-02")

        habit, purged = engine.delete_habit(gym.id)

        assert habit is gym
        assert sorted(purged) == ["2026-10-01", "2026-10-02", clock.day]
        log = engine.completion_log.to_dict()
        assert all("Gym" not in names for names in log.values())
        assert log == {clock.day: ["Read"]}
        assert [h.name for h in engine.habits] == ["Read"]

    def test_delete_unknown_id(self, engine):
        """Test unknown ids are ignored."""
        assert engine.delete_habit("missing") is None

    def test_name_can_be_reused_after_delete(self, engine):
        """Test deleting frees the name."""
        habit = engine.add_habit("Gym")
        engine.delete_habit(habit.id)
        assert engine.add_habit("gym").name == "gym"


class TestToggleOnDate:
    """Tests for toggle_on_date."""

    def test_past_toggle_leaves_streak_alone(self, engine, clock):
        """Test historical edits never touch streak/lastDone."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        past = "2026-10-18"

        assert engine.toggle_on_date("Gym", past) is True
        assert (habit.streak, habit.last_done) == (1, clock.day)
        assert engine.completion_log.has(past, "Gym")

        assert engine.toggle_on_date("Gym", past) is False
        assert (habit.streak, habit.last_done) == (1, clock.day)
        assert past not in engine.completion_log

    def test_toggle_today_on_extends_streak(self, engine, clock):
        """Test toggling today on counts like mark_done."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        clock.advance()
        assert engine.toggle_on_date("Gym", clock.day) is True
        assert habit.streak == 2
        assert habit.last_done == clock.day

    def test_toggle_today_on_after_gap(self, engine, clock):
        """Test a gap restarts the streak on a toggle too."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        clock.advance(4)
        engine.toggle_on_date("Gym", clock.day)
        assert habit.streak == 1

    def test_toggle_today_off_clears_streak(self, engine, clock):
        """Test unmarking today drops a streak that ended today."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        assert engine.toggle_on_date("Gym", clock.day) is False
        assert habit.streak == 0
        assert habit.last_done is None
        assert clock.day not in engine.completion_log

    def test_toggle_today_off_when_streak_ended_earlier(self, engine, clock):
        """Test unmarking today leaves an older streak alone."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        clock.advance()
        engine.toggle_on_date("Gym", clock.day)
        engine.reset_habit(habit.id)
        habit.record_completion("2026-10-19", 5)
        engine.toggle_on_date("Gym", clock.day)
        assert (habit.streak, habit.last_done) == (5, "2026-10-19")

    def test_toggle_today_on_when_already_done_keeps_streak(self, clock):
        """Test a habit already done today is not recounted."""
        habit = Habit(name="Gym", streak=3, last_done=clock.day)
        engine = HabitEngine([habit], CompletionLog(), clock)
        engine.toggle_on_date("Gym", clock.day)
        assert (habit.streak, habit.last_done) == (3, clock.day)

    def test_toggle_name_without_habit(self, engine, clock):
        """Test the log accepts names with no matching habit."""
        assert engine.toggle_on_date("Ghost", clock.day) is True
        assert engine.completion_log.entries_on(clock.day) == ["Ghost"]

    def test_toggle_empty_inputs(self, engine):
        """Test empty name or day is ignored."""
        assert engine.toggle_on_date("", "2026-10-19") is None
        assert engine.toggle_on_date("Gym", "") is None

    def test_toggle_rejects_malformed_day(self, engine):
        """Test dates must be day identifiers."""
        with pytest.raises(ValidationError):
            engine.toggle_on_date("Gym", "19/10/2026")
        assert len(engine.completion_log) == 0


class TestWeekView:
    """Tests for the weekly strip."""

    def test_week_view(self, engine, clock):
        """Test Monday-first days with done flags."""
        habit = engine.add_habit("Gym")
        engine.mark_done(habit.id)
        engine.toggle_on_date("Gym", "2026-10-21")

        week = engine.week_view(habit.id)

        assert [d.label for d in week] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert [d.date for d in week][0] == "2026-10-19"
        assert [d.done for d in week] == [True, False, True, False, False, False, False]

    def test_week_view_unknown_habit(self, engine):
        """Test unknown ids give an empty strip."""
        assert engine.week_view("missing") == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

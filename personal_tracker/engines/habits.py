"""
Habit Engine

Owns the habit list and the completion log and applies every rule that
connects them.

STREAK RULE:
- First completion ever (or after a reset): streak = 1
- Completed exactly one day after last_done: streak + 1
- Any other gap: streak = 1
- Already completed today: nothing changes

DESIGN DECISION: The completion log refers to habits by NAME, which is
what stored logs have always contained. Renaming would orphan history,
which is why renaming is not offered. The name is derived in exactly one
place, log_key(), so switching the log to habit ids is a local change.

KNOWN ASYMMETRY: toggling a PAST day on the calendar edits the log but
does not recompute the streak. Only toggles on today touch streak and
last_done. This matches long-standing behaviour and is deliberately left
alone until someone decides history edits should rewrite streaks.
"""

from typing import Callable, Iterable, Optional

from personal_tracker.dates import day_difference, week_of, weekday_label
from personal_tracker.models.habit import CompletionLog, Habit, WeekDay
from personal_tracker.validation import (
    require_valid,
    validate_day,
    validate_habit_name,
)


class HabitEngine:
    """
    Habit collection plus completion log.

    ``today`` is called whenever the engine needs the current day
    identifier, so tests can move the clock.
    """

    def __init__(
        self,
        habits: Iterable[Habit],
        completion_log: CompletionLog,
        today: Callable[[], str],
    ):
        self._habits: list[Habit] = list(habits)
        self._log = completion_log
        self._today = today

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def habits(self) -> list[Habit]:
        """Habits in creation order. The list is a copy; the habits are not."""
        return list(self._habits)

    @property
    def completion_log(self) -> CompletionLog:
        return self._log

    def get(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self._habits if h.id == habit_id), None)

    def find_by_name(self, name: str) -> Optional[Habit]:
        """Exact (case-sensitive) match, the way log entries refer to habits."""
        return next((h for h in self._habits if h.name == name), None)

    @staticmethod
    def log_key(habit: Habit) -> str:
        """What the completion log records for ``habit``."""
        return habit.name

    def is_done_today(self, habit_id: str) -> bool:
        habit = self.get(habit_id)
        return habit is not None and habit.last_done == self._today()

    def week_view(self, habit_id: str, day: Optional[str] = None) -> list[WeekDay]:
        """Monday-first week containing ``day`` (default today) for one habit."""
        habit = self.get(habit_id)
        if habit is None:
            return []
        key = self.log_key(habit)
        return [
            WeekDay(date=d, label=weekday_label(d), done=self._log.has(d, key))
            for d in week_of(day or self._today())
        ]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_habit(self, name: str) -> Habit:
        """
        Create a habit with no streak.

        Raises:
            ValidationError: empty name, or a habit with the same name
                             ignoring case already exists
        """
        require_valid(validate_habit_name(name, (h.name for h in self._habits)))
        habit = Habit(name=name.strip())
        self._habits.append(habit)
        return habit

    def _complete(self, habit: Habit, day: str) -> None:
        """Advance or restart the streak so it ends on ``day``."""
        if habit.last_done is None:
            streak = 1
        else:
            gap = day_difference(day, habit.last_done)
            streak = habit.streak + 1 if gap == 1 else 1
        habit.record_completion(day, streak)

    def mark_done(self, habit_id: str) -> Optional[Habit]:
        """
        Complete a habit for today.

        Returns the habit, or None when nothing changed (unknown id, or
        already done today).
        """
        habit = self.get(habit_id)
        if habit is None:
            return None
        today = self._today()
        if habit.last_done == today:
            return None

        self._complete(habit, today)
        self._log.add(today, self.log_key(habit))
        return habit

    def reset_habit(self, habit_id: str) -> Optional[Habit]:
        """
        Drop the streak back to zero.

        Past log days keep the habit: the log is history, the streak is not.
        """
        habit = self.get(habit_id)
        if habit is None:
            return None
        habit.clear_streak()
        return habit

    def delete_habit(self, habit_id: str) -> Optional[tuple[Habit, list[str]]]:
        """
        Remove a habit and every log reference to it.

        Returns (habit, days it was purged from), or None for an unknown id.
        """
        habit = self.get(habit_id)
        if habit is None:
            return None
        self._habits = [h for h in self._habits if h.id != habit_id]
        purged = self._log.purge(self.log_key(habit))
        return habit, purged

    def toggle_on_date(self, name: str, day: str) -> Optional[bool]:
        """
        Flip whether ``name`` is logged as done on ``day``.

        On today, the habit's streak follows the toggle: ON completes it
        exactly as mark_done would, OFF clears the streak if it ended today.
        Other days only change the log.

        Returns the new membership, or None for an empty name or day.

        Raises:
            ValidationError: ``day`` is not a YYYY-MM-DD identifier
        """
        if not name or not day:
            return None
        require_valid(validate_day(day))

        done = self._log.toggle(day, name)

        if day == self._today():
            habit = self.find_by_name(name)
            if habit is not None:
                if done:
                    if habit.last_done != day:
                        self._complete(habit, day)
                elif habit.last_done == day:
                    habit.clear_streak()

        return done

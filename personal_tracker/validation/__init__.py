"""Input validation package."""

from personal_tracker.validation.validator import (
    TrackerError,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    get_user_friendly_summary,
    parse_amount,
    parse_budget,
    require_valid,
    validate_day,
    validate_entry,
    validate_habit_name,
)

__all__ = [
    "TrackerError",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "get_user_friendly_summary",
    "parse_amount",
    "parse_budget",
    "require_valid",
    "validate_day",
    "validate_entry",
    "validate_habit_name",
]

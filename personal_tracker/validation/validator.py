"""
Input Validation

DESIGN DECISION: Every user-supplied value is checked BEFORE any state is
touched. A rejected operation leaves habits, log and ledger exactly as they
were.

Checks produce ValidationIssues (which field, what kind of problem, a
human message). Engines turn a result with errors into a ValidationError,
which the rendering layer shows as a blocking notice.

IMPORTANT: Validation NEVER silently fixes issues, with one exception
inherited from the budget form: an empty or non-positive budget means
"no budget" (see parse_budget).
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from personal_tracker.dates import is_day
from personal_tracker.models.finance import EntryKind, is_storable, to_decimal


# Plain decimal or exponent notation, ASCII digits only (no "1_000", no "0x10")
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'duplicate', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one operation's input."""

    operation: str
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def issue_dicts(self) -> list[dict]:
        return [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in self.issues
        ]


class TrackerError(Exception):
    """Base exception for the tracker."""
    pass


class ValidationError(TrackerError):
    """
    User input was rejected. Nothing was changed.

    The message is ready to show to the user.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(get_user_friendly_summary(result))

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


def parse_amount(value) -> Optional[Decimal]:
    """
    Read a money amount from user input.

    Returns None for anything that is not a finite number. Strings must
    be plain decimal or exponent notation. Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not NUMBER_PATTERN.fullmatch(value):
            return None
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_budget(value) -> Optional[Decimal]:
    """
    Read the monthly budget from the budget form.

    Empty, non-numeric or non-positive input clears the budget, as does
    a number that cannot be stored as JSON.
    """
    amount = parse_amount(value)
    if amount is None or amount <= 0 or not is_storable(amount):
        return None
    return amount


def validate_habit_name(name, existing_names: Iterable[str]) -> ValidationResult:
    """Habit names are required and unique ignoring case."""
    result = ValidationResult(operation="add_habit")
    cleaned = name.strip() if isinstance(name, str) else ""

    if not cleaned:
        result.issues.append(ValidationIssue(
            field="name",
            issue_type="missing",
            message="Habit name cannot be empty.",
        ))
        return result

    folded = cleaned.casefold()
    if any(existing.casefold() == folded for existing in existing_names):
        result.issues.append(ValidationIssue(
            field="name",
            issue_type="duplicate",
            message="Habit already exists.",
        ))

    return result


def validate_entry(kind, description, amount) -> ValidationResult:
    """A ledger entry needs a known kind, a description and a positive amount."""
    result = ValidationResult(operation="add_entry")

    try:
        EntryKind(kind)
    except ValueError:
        result.issues.append(ValidationIssue(
            field="kind",
            issue_type="invalid_value",
            message=f"Entry type must be 'expense' or 'income', got {kind!r}.",
        ))

    if not isinstance(description, str) or not description.strip():
        result.issues.append(ValidationIssue(
            field="description",
            issue_type="missing",
            message="Enter a description.",
        ))

    parsed = parse_amount(amount)
    if parsed is None:
        result.issues.append(ValidationIssue(
            field="amount",
            issue_type="invalid_format",
            message="Amount must be a number.",
        ))
    elif parsed <= 0:
        result.issues.append(ValidationIssue(
            field="amount",
            issue_type="invalid_value",
            message="Amount must be greater than zero.",
        ))
    elif not is_storable(parsed):
        result.issues.append(ValidationIssue(
            field="amount",
            issue_type="out_of_range",
            message="Amount is out of range or has too many digits.",
        ))

    return result


def validate_day(value, field: str = "date", operation: str = "toggle_on_date") -> ValidationResult:
    result = ValidationResult(operation=operation)
    if not is_day(value):
        result.issues.append(ValidationIssue(
            field=field,
            issue_type="invalid_format",
            message=f"Dates must look like YYYY-MM-DD, got {value!r}.",
        ))
    return result


def require_valid(result: ValidationResult) -> None:
    """Raise ValidationError if ``result`` has any error-level issue."""
    if result.has_errors:
        raise ValidationError(result)


def get_user_friendly_summary(result: ValidationResult) -> str:
    """
    Generate the notice shown to the user.

    A single issue is shown as its message alone.
    """
    errors = [i.message for i in result.issues if i.severity == "error"]
    if not errors:
        return "All checks passed."
    if len(errors) == 1:
        return errors[0]
    lines = ["Please fix the following:"]
    lines.extend(f"   • {message}" for message in errors)
    return "\n".join(lines)

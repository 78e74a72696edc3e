"""
Validation rules for task payloads
Each field has its own constraint check; the create and update validators
run every check and collect all violations in one pass
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..models.task import (
    TITLE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    STATUS_VALUES,
    PRIORITY_VALUES,
    TaskStatus,
    TaskPriority,
    as_utc,
)

NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"

# (normalized value, violation messages)
CheckOutcome = Tuple[Any, List[str]]


@dataclass
class ValidationResult:
    """Outcome of validating a payload: a normalized value or a list of violations"""
    value: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


# ============ Constraint checks ============

def check_text(
    value: Any,
    label: str,
    min_length: int,
    max_length: int,
    empty_message: str,
) -> CheckOutcome:
    """Trim a text value and check it is non-empty and within its length bounds."""
    if not isinstance(value, str):
        return None, [f"{label} must be a string"]

    text = value.strip()
    if not text:
        return None, [empty_message]
    if len(text) < min_length:
        return None, [f"{label} must be at least {min_length} characters long"]
    if len(text) > max_length:
        return None, [f"{label} cannot exceed {max_length} characters"]
    return text, []


def check_choice(value: Any, label: str, choices: List[str]) -> CheckOutcome:
    if not isinstance(value, str) or value not in choices:
        return None, [f"{label} must be one of: {', '.join(choices)}"]
    return value, []


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 date/datetime string, a datetime, or a millisecond
    timestamp into an aware UTC datetime. Returns None when unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def check_due_date(value: Any, now: datetime, allow_null: bool) -> CheckOutcome:
    """Check a due date is a valid date strictly later than `now`."""
    if value is None and allow_null:
        return None, []

    parsed = parse_date(value)
    if parsed is None:
        return None, ["Due date must be a valid date"]
    if parsed <= now:
        return None, ["Due date must be in the future"]
    return parsed, []


def check_tags(value: Any) -> CheckOutcome:
    """Trim and lowercase every tag; order and duplicates are kept."""
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        return None, ["Tags must be an array of strings"]

    tags = [tag.strip().lower() for tag in value]
    if any(not tag for tag in tags):
        return None, ["Tags cannot contain empty values"]
    return tags, []


# ============ Field rules ============

def _title_rule(partial: bool) -> Callable[[Any, datetime], CheckOutcome]:
    empty = "Title cannot be empty" if partial else "Title is required"
    return lambda value, now: check_text(value, "Title", TITLE_MIN_LENGTH, TITLE_MAX_LENGTH, empty)


def _description_rule(partial: bool) -> Callable[[Any, datetime], CheckOutcome]:
    empty = "Description cannot be empty" if partial else "Description is required"
    return lambda value, now: check_text(
        value, "Description", DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH, empty
    )


def _status_rule(value: Any, now: datetime) -> CheckOutcome:
    return check_choice(value, "Status", STATUS_VALUES)


def _priority_rule(value: Any, now: datetime) -> CheckOutcome:
    return check_choice(value, "Priority", PRIORITY_VALUES)


def _tags_rule(value: Any, now: datetime) -> CheckOutcome:
    return check_tags(value)


# Each entry: (payload key, normalized key, check, message when missing, default)
# A missing field with no message and no default is simply left out.
_MISSING = object()

CREATE_RULES = [
    ("title", "title", _title_rule(partial=False), "Title is required", _MISSING),
    ("description", "description", _description_rule(partial=False), "Description is required", _MISSING),
    ("status", "status", _status_rule, None, TaskStatus.PENDING.value),
    ("priority", "priority", _priority_rule, None, TaskPriority.MEDIUM.value),
    ("dueDate", "due_date", lambda value, now: check_due_date(value, now, allow_null=False), None, _MISSING),
    ("tags", "tags", _tags_rule, None, []),
]

UPDATE_RULES = [
    ("title", "title", _title_rule(partial=True), None, _MISSING),
    ("description", "description", _description_rule(partial=True), None, _MISSING),
    ("status", "status", _status_rule, None, _MISSING),
    ("priority", "priority", _priority_rule, None, _MISSING),
    ("dueDate", "due_date", lambda value, now: check_due_date(value, now, allow_null=True), None, _MISSING),
    ("tags", "tags", _tags_rule, None, _MISSING),
]


def _run_rules(raw: Any, rules: list, now: Optional[datetime]) -> ValidationResult:
    if not isinstance(raw, Mapping):
        return ValidationResult(errors=[NOT_AN_OBJECT_MESSAGE])

    now = as_utc(now) or datetime.now(timezone.utc)
    result = ValidationResult()

    for key, target, check, missing_message, default in rules:
        present = key in raw and not (raw[key] is None and missing_message)
        if not present:
            if missing_message:
                result.errors.append(missing_message)
            elif default is not _MISSING:
                result.value[target] = list(default) if isinstance(default, list) else default
            continue

        value, errors = check(raw[key], now)
        if errors:
            result.errors.extend(errors)
        else:
            result.value[target] = value

    if result.errors:
        result.value = {}
    return result


def validate_create(raw: Any, now: Optional[datetime] = None) -> ValidationResult:
    """
    Validate a task creation payload.

    Title and description are required; status, priority and tags get their
    defaults when omitted. Unknown fields are dropped.

    Args:
        raw: Decoded request body
        now: Reference time for the due date check, defaults to the current time

    Returns:
        ValidationResult with the normalized fields or every violation found
    """
    return _run_rules(raw, CREATE_RULES, now)


def validate_update(raw: Any, now: Optional[datetime] = None) -> ValidationResult:
    """
    Validate a partial task update payload.

    Every field is optional and an empty payload is valid. A null dueDate
    clears the due date. Unknown fields are dropped.
    """
    return _run_rules(raw, UPDATE_RULES, now)


__all__ = [
    "ValidationResult",
    "NOT_AN_OBJECT_MESSAGE",
    "check_text",
    "check_choice",
    "check_due_date",
    "check_tags",
    "parse_date",
    "validate_create",
    "validate_update",
]

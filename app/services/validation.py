from app.errors import ValidationFailedError
from app.models.tasks import TaskStatus

# Generated ids are positive and fit a signed 64-bit column
MIN_ID = 1
MAX_ID = 2**63 - 1


def sanitize_string(v):
    if not isinstance(v, str):
        return v
    return v.strip()


def require_text(value, field: str) -> str:
    """Return the trimmed value, or fail if it is missing or blank."""
    value = sanitize_string(value)
    if not isinstance(value, str) or len(value) == 0:
        raise ValidationFailedError(f"{field.capitalize()} is required")
    return value


def require_id(value, field: str, message: str | None = None) -> int:
    """Resolve a submitted reference to an integer identifier in the BIGINT range."""
    message = message or f"{field.capitalize()} is required"
    if isinstance(value, bool) or value is None:
        raise ValidationFailedError(message)
    if isinstance(value, str):
        value = sanitize_string(value)
        # isdigit() alone also accepts non-ASCII digits such as "²"
        if not (value.isascii() and value.isdigit()) or len(value) > len(str(MAX_ID)):
            raise ValidationFailedError(message)
        value = int(value)
    if not isinstance(value, int) or not MIN_ID <= value <= MAX_ID:
        raise ValidationFailedError(message)
    return value


def parse_status(value, default: TaskStatus | None = None) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    value = sanitize_string(value)
    if value is None or value == "":
        if default is None:
            raise ValidationFailedError("Status is required")
        return default
    try:
        return TaskStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationFailedError(f"Status must be one of {allowed}")

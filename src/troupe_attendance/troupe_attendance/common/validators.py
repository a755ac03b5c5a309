from __future__ import annotations

from typing import Any, Optional

from ..core.enums import EventType
from ..core.exceptions import ValidationError


def require_non_empty(value, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def blank_to_none(value) -> Optional[str]:
    """Forms send '' for untouched optional fields; store those as NULL."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_event_type(value: Any) -> Optional[EventType]:
    if value is None or value == "":
        return None
    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value).strip())
    except ValueError:
        raise ValidationError(f"Unknown event type: {value}") from None


def parse_bool(value: Any) -> bool:
    """JSON bodies send real booleans; form-ish clients send 'true'/'1'/'yes'."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}

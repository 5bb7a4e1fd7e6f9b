from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {field_name}.")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name}: expected text.")
    return value.strip() or None


def require_iso_date(value: str, param_name: str) -> date:
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {param_name}: expected YYYY-MM-DD.") from None


def require_positive_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Invalid {field_name}: expected a positive integer.")
    return value

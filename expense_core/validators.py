"""Validation helpers shared across expense tracker services."""

from __future__ import annotations

import math
from datetime import date, datetime

from .exceptions import ValidationError

REQUIRED_FIELDS_MESSAGE = "Amount, category, and date are required"


def is_missing(value: object) -> bool:
    """Mirror the client contract: None, empty strings and zero count as not supplied."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def parse_amount(raw: object, field: str = "amount") -> float:
    """Convert raw input to a finite, positive float."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = float(str(raw).strip()) if isinstance(raw, str) else float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def validate_required_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    return trimmed


def validate_description(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("description must be a string")
    return value.strip()


def validate_date(value: object, field: str = "date") -> str:
    """Return the canonical YYYY-MM-DD form of a calendar date."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = validate_required_str(value, field)
    try:
        parsed = date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"{field} must be an ISO 8601 date (YYYY-MM-DD)") from exc
    return parsed.isoformat()

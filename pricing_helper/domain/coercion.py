"""Typed coercion of raw form input into request fields.

Every function here is pure: it takes what the operator typed (or toggled)
and returns the typed value, ``None`` for blank optional fields, or raises
``InputValidationError`` naming the offending field.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union


RawValue = Union[str, int, float, None]

_TRUE_TOKENS = frozenset({"true", "1", "yes", "on"})
_FALSE_TOKENS = frozenset({"false", "0", "no", "off", ""})


class InputValidationError(ValueError):
    """Raised when a form field cannot be coerced into its request type."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


def is_blank(raw: RawValue) -> bool:
    if raw is None:
        return True
    if isinstance(raw, str):
        return raw.strip() == ""
    return False


def _parse_decimal(raw: RawValue, field: str) -> Decimal:
    if isinstance(raw, bool):
        raise InputValidationError(field, f"{field} must be a number")
    text = str(raw).strip()
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InputValidationError(field, f"{field} must be a number, got {text!r}") from exc
    if not value.is_finite():
        raise InputValidationError(field, f"{field} must be a finite number")
    return value


def _to_int(value: Decimal, field: str, minimum: Optional[int]) -> int:
    if value != value.to_integral_value():
        raise InputValidationError(field, f"{field} must be a whole number")
    result = int(value)
    if minimum is not None and result < minimum:
        raise InputValidationError(field, f"{field} must be >= {minimum}")
    return result


def coerce_required_int(raw: RawValue, field: str, minimum: Optional[int] = None) -> int:
    if is_blank(raw):
        raise InputValidationError(field, f"{field} is required")
    return _to_int(_parse_decimal(raw, field), field, minimum)


def coerce_optional_int(
    raw: RawValue,
    field: str,
    minimum: Optional[int] = None,
) -> Optional[int]:
    if is_blank(raw):
        return None
    return _to_int(_parse_decimal(raw, field), field, minimum)


def _to_float(value: Decimal, field: str) -> float:
    result = float(value)
    if not math.isfinite(result):
        raise InputValidationError(field, f"{field} is out of range")
    return result


def coerce_required_float(raw: RawValue, field: str) -> float:
    if is_blank(raw):
        raise InputValidationError(field, f"{field} is required")
    return _to_float(_parse_decimal(raw, field), field)


def coerce_optional_float(raw: RawValue, field: str) -> Optional[float]:
    if is_blank(raw):
        return None
    return _to_float(_parse_decimal(raw, field), field)


def coerce_optional_str(raw: Optional[str]) -> Optional[str]:
    if is_blank(raw):
        return None
    return str(raw).strip()


def coerce_bool(raw: Union[bool, str, int, None], field: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    if isinstance(raw, int):
        if raw in (0, 1):
            return bool(raw)
        raise InputValidationError(field, f"{field} must be a boolean")
    token = str(raw).strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise InputValidationError(field, f"{field} must be a boolean, got {raw!r}")


def coerce_required_date(raw: Union[str, date, None], field: str) -> date:
    if isinstance(raw, date):
        return raw
    if is_blank(raw):
        raise InputValidationError(field, f"{field} is required")
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise InputValidationError(field, f"{field} must follow YYYY-MM-DD format") from exc


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, so 132.5 becomes 133."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

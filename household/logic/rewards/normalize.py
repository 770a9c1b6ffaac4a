"""Normalization rules for chore fields.

Used by the pydantic input schemas in household.utilities.validators, so every
create/update path goes through the same coercions:
  - title: trimmed, must not be blank
  - reward amount: non-negative decimal within float range, anything else coerces to 0
  - reward currency: 3+ letters, uppercased, blank falls back to the default
  - assigned_to: kept only when name or role is non-blank after trimming
"""
from __future__ import annotations
import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from household.domain.Chore import AssignedTo
from household.domain.errors import ValidationError
from household.utilities.config import DEFAULT_REWARD_CURRENCY
from household.utilities.constants import (
    DEFAULT_PRIORITY, ISO_DATE_FORMAT, MIN_CURRENCY_LENGTH, PRIORITIES
)

__all__ = [
    "normalize_title", "normalize_reward_amount", "normalize_currency",
    "normalize_assigned_to", "normalize_priority", "normalize_due_date",
]


def normalize_title(raw: Any) -> str:
    title = str(raw).strip() if raw is not None else ""
    if not title:
        raise ValidationError("Title is required")
    return title


def normalize_reward_amount(raw: Any) -> Decimal:
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return Decimal(0)
    # beyond float range counts as invalid too
    if not amount.is_finite() or amount < 0 or not math.isfinite(float(amount)):
        return Decimal(0)
    return amount


def normalize_currency(raw: Any) -> str:
    code = str(raw).strip() if raw is not None else ""
    if not code:
        return DEFAULT_REWARD_CURRENCY
    if len(code) < MIN_CURRENCY_LENGTH or not (code.isascii() and code.isalpha()):
        raise ValidationError(f"Invalid currency code: {code!r}")
    return code.upper()


def normalize_assigned_to(raw: Any) -> Optional[AssignedTo]:
    if isinstance(raw, AssignedTo):
        name, role = raw.name, raw.role
    elif isinstance(raw, dict):
        name, role = raw.get("name"), raw.get("role")
    elif raw is None:
        return None
    else:
        name, role = getattr(raw, "name", None), getattr(raw, "role", None)
    name = (name or "").strip()
    role = (role or "").strip()
    if not name and not role:
        return None
    return AssignedTo(name, role)


def normalize_priority(raw: Any) -> str:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return DEFAULT_PRIORITY
    value = str(raw).strip().lower()
    if value not in PRIORITIES:
        raise ValidationError(f"Priority must be one of {', '.join(PRIORITIES)}")
    return value


def normalize_due_date(raw: Any) -> Optional[date]:
    """Day granularity only: datetimes and ISO timestamps are cut to their date."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text[:10], ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid due date: {text!r} (expected YYYY-MM-DD)")

"""
Input validation schemas using Pydantic for chore, meal plan and grocery payloads.

Field names follow the JSON wire format (camelCase) used by the API and the data files.
"""
import math
from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from household.domain.errors import ValidationError
from household.logic.rewards.normalize import (
    normalize_assigned_to, normalize_currency, normalize_due_date,
    normalize_priority, normalize_reward_amount, normalize_title
)
from household.utilities.config import DEFAULT_REWARD_CURRENCY
from household.utilities.constants import DEFAULT_PRIORITY, MEAL_SLOTS, RECURRENCE_FREQUENCIES


class AssignedToInput(BaseModel):
    """Schema for the inline name + role assignment."""
    name: Optional[str] = None
    role: Optional[str] = None


class RecurrenceInput(BaseModel):
    freq: str
    byDay: List[int] = Field(default_factory=list)
    interval: int = Field(1, ge=1)

    @field_validator('freq')
    @classmethod
    def validate_freq(cls, v):
        v = v.strip().upper()
        if v not in RECURRENCE_FREQUENCIES:
            raise ValueError(f"freq must be one of {', '.join(RECURRENCE_FREQUENCIES)}")
        return v

    @field_validator('byDay')
    @classmethod
    def validate_by_day(cls, v):
        """Weekday numbers 0 (Sunday) .. 6 (Saturday), de-duplicated, order kept."""
        out = []
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f'byDay values must be between 0 and 6, got {day}')
            if day not in out:
                out.append(day)
        return out


class ChoreAssignmentInput(BaseModel):
    memberId: str = Field(..., min_length=1)
    dueDate: Optional[date] = None
    recurrence: Optional[RecurrenceInput] = None
    points: Decimal = Field(Decimal(0), ge=0)

    @field_validator('memberId')
    @classmethod
    def strip_member(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('memberId is required')
        return v

    @field_validator('dueDate', mode='before')
    @classmethod
    def validate_due_date(cls, v):
        return normalize_due_date(v)

    @field_validator('points')
    @classmethod
    def validate_points(cls, v):
        if not math.isfinite(float(v)):
            raise ValueError('points out of range')
        return v


class _ChoreFields(BaseModel):
    model_config = ConfigDict(extra='ignore')

    @field_validator('title', mode='before', check_fields=False)
    @classmethod
    def validate_title(cls, v):
        """Trimmed, non-blank title."""
        return normalize_title(v)

    @field_validator('priority', mode='before', check_fields=False)
    @classmethod
    def validate_priority(cls, v):
        return normalize_priority(v)

    @field_validator('dueDate', mode='before', check_fields=False)
    @classmethod
    def validate_due_date(cls, v):
        return normalize_due_date(v)

    @field_validator('rewardAmount', mode='before', check_fields=False)
    @classmethod
    def coerce_reward_amount(cls, v):
        """Non-numeric or negative amounts become 0."""
        return normalize_reward_amount(v)

    @field_validator('rewardCurrency', mode='before', check_fields=False)
    @classmethod
    def validate_currency(cls, v):
        return normalize_currency(v)

    @field_validator('assignedTo', mode='after', check_fields=False)
    @classmethod
    def drop_blank_assignee(cls, v):
        """Keep the assignment only if name or role survives trimming."""
        normalized = normalize_assigned_to(v)
        if normalized is None:
            return None
        return AssignedToInput(name=normalized.name, role=normalized.role)

    @field_validator('assignments', mode='before', check_fields=False)
    @classmethod
    def drop_unassigned(cls, v):
        """Planned assignments without a member are discarded."""
        if v is None:
            return []
        return [a for a in v if not isinstance(a, dict) or str(a.get('memberId') or '').strip()]

    @field_validator('notes', mode='before', check_fields=False)
    @classmethod
    def default_notes(cls, v):
        return '' if v is None else str(v)


class ChoreInput(_ChoreFields):
    """Schema for creating a chore."""
    title: str
    notes: str = ""
    priority: str = DEFAULT_PRIORITY
    dueDate: Optional[date] = None
    rewardAmount: Decimal = Decimal(0)
    rewardCurrency: str = DEFAULT_REWARD_CURRENCY
    assignedTo: Optional[AssignedToInput] = None
    assignments: List[ChoreAssignmentInput] = Field(default_factory=list)
    active: bool = True

    @field_validator('active', mode='before')
    @classmethod
    def default_active(cls, v):
        """Anything that is not a real boolean means 'active'."""
        return v if isinstance(v, bool) else True


class ChorePatch(_ChoreFields):
    """Schema for a partial chore update. Only fields present in the payload are applied."""
    title: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[str] = None
    dueDate: Optional[date] = None
    rewardAmount: Optional[Decimal] = None
    rewardCurrency: Optional[str] = None
    assignedTo: Optional[AssignedToInput] = None
    assignments: Optional[List[ChoreAssignmentInput]] = None
    active: Optional[bool] = None

    @field_validator('rewardCurrency', mode='before')
    @classmethod
    def validate_currency(cls, v):
        """An explicit null leaves the stored currency unchanged."""
        return None if v is None else normalize_currency(v)

    @field_validator('active')
    @classmethod
    def reject_null_active(cls, v):
        if v is None:
            raise ValueError('active must be a boolean')
        return v


class CompletionInput(BaseModel):
    memberId: Optional[str] = None

    @field_validator('memberId')
    @classmethod
    def blank_to_none(cls, v):
        """An empty member id means the completion is not attributed to anyone."""
        if v is None or not v.strip():
            return None
        return v.strip()


class PayMemberInput(BaseModel):
    memberId: str

    @field_validator('memberId')
    @classmethod
    def require_member(cls, v):
        if not v or not v.strip():
            raise ValueError('memberId is required')
        return v.strip()


class MealSlotInput(BaseModel):
    """Schema for placing (or clearing) a recipe in one slot of the weekly plan."""
    dayIndex: int = Field(..., ge=0, le=6)
    slot: str
    recipeId: Optional[str] = None

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v):
        v = v.strip().lower()
        if v not in MEAL_SLOTS:
            raise ValueError(f"slot must be one of {', '.join(MEAL_SLOTS)}")
        return v

    @field_validator('recipeId')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v


class GroceryItemInput(BaseModel):
    """Schema for a manually added grocery item."""
    name: str = Field(..., min_length=1, max_length=200)
    qty: Optional[Union[int, float, str]] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('name cannot be empty')
        return v


def validate_payload(schema, payload, *, partial: bool = False) -> dict:
    """Validate payload against a schema and return the cleaned fields.

    With partial=True only the fields present in the payload are returned.
    Pydantic errors are re-raised as the core ValidationError.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Payload must be an object")
    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as e:
        messages = []
        for err in e.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            msg = err.get("msg", "invalid value")
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, "):]
            messages.append(f"{loc}: {msg}" if loc else msg)
        raise ValidationError("; ".join(messages)) from e
    return dict((name, getattr(model, name)) for name in (model.model_fields_set if partial else type(model).model_fields))

from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query

from household.api import dependencies
from household.api.errors import http_errors
from household.domain.Plan import parse_iso_date
from household.utilities.validators import MealSlotInput, validate_payload

router = APIRouter(prefix="/api/meal-plan", tags=["meal-plan"])


def _parse_day(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date {value!r} (expected YYYY-MM-DD)")


@router.get("")
def get_week(day: Optional[str] = Query(default=None, alias="date"), offset: int = Query(default=0)):
    """Week containing the given date (today by default), optionally shifted by offset weeks."""
    repo = dependencies.plan_repository()
    plan = repo.get_week(_parse_day(day) if day else None)
    if offset:
        plan = repo.shift_week(plan.week_start_iso, offset)
    return plan.to_dict()


@router.put("/{week_start}/slot")
def set_slot(week_start: str, data: Optional[dict] = Body(default=None)):
    _parse_day(week_start)
    with http_errors():
        values = validate_payload(MealSlotInput, data)
    plan = dependencies.plan_repository().set_recipe(week_start, values["dayIndex"], values["slot"], values["recipeId"])
    return plan.to_dict()


@router.post("/{week_start}/clear")
def clear_week(week_start: str):
    _parse_day(week_start)
    return dependencies.plan_repository().clear_week(week_start).to_dict()

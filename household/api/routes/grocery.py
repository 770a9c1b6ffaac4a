import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query, Response

from household.api import dependencies
from household.api.errors import http_errors
from household.domain.Plan import parse_iso_date
from household.logic.shopping.list_builder import generate_shopping_list
from household.utilities.validators import GroceryItemInput, validate_payload

router = APIRouter(prefix="/api/grocery", tags=["grocery"])
logger = logging.getLogger(__name__)


@router.get("")
def list_grocery():
    return dependencies.grocery_store().load().to_dict()


@router.post("", status_code=201)
def add_grocery(data: Optional[dict] = Body(default=None)):
    with http_errors():
        values = validate_payload(GroceryItemInput, data)
    store = dependencies.grocery_store()
    with store.lock:
        grocery = store.load()
        item = grocery.add_item(values["name"], values["qty"])
        store.save(grocery)
    return item.to_dict()


@router.delete("/{item_id}", status_code=204)
def delete_grocery(item_id: str):
    store = dependencies.grocery_store()
    with store.lock:
        grocery = store.load()
        if not grocery.remove_item(item_id):
            raise HTTPException(status_code=404, detail="Not found")
        store.save(grocery)
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_grocery():
    store = dependencies.grocery_store()
    with store.lock:
        grocery = store.load()
        grocery.clear()
        store.save(grocery)
    return Response(status_code=204)


@router.post("/generate")
def generate_from_plan(week: Optional[str] = Query(default=None), distinct: bool = Query(default=False)):
    """Replace the grocery list with the aggregated ingredients of the week's planned recipes."""
    try:
        day = parse_iso_date(week) if week else None
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid week {week!r} (expected YYYY-MM-DD)")
    plan = dependencies.plan_repository().get_week(day)
    generated = generate_shopping_list(plan, dependencies.recipe_store(), distinct=distinct)
    store = dependencies.grocery_store()
    with store.lock:
        grocery = store.load()
        grocery.replace_with(generated)
        store.save(grocery)
    logger.info("Grocery list replaced from week %s (%d items)", plan.week_start_iso, len(generated))
    return {
        "week": plan.week_start_iso,
        "count": len(generated),
        "items": grocery.to_dict(),
    }

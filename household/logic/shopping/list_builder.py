"""Shopping list builder.

Turns the recipes placed in a weekly meal plan into a deduplicated shopping list.
Provides aggregate_ingredients(references), merge_aggregates(*lists) and
generate_shopping_list(plan, recipe_store, distinct=False).
"""
import logging
from typing import Any, Iterable, List

from household.domain.Ingredient import AggregatedIngredient, IngredientReference
from household.domain.Plan import MealPlan
from household.logic.shopping.quantity_merger import merge_quantities

logger = logging.getLogger(__name__)


def _as_reference(item: Any) -> IngredientReference:
    if isinstance(item, IngredientReference):
        return item
    if isinstance(item, AggregatedIngredient):
        return item.to_reference()
    if isinstance(item, str):
        return IngredientReference(item)
    return IngredientReference.from_dict(item)


def aggregate_ingredients(references: Iterable[Any]) -> List[AggregatedIngredient]:
    """Collapse ingredient references into one entry per case-insensitive name.

    Accepts IngredientReference / AggregatedIngredient objects or {name, qty} dicts.
    Never raises on malformed input: empty names are skipped and unparsable
    quantities are kept as text.

    Returns:
        List of AggregatedIngredient sorted by name (case-insensitive).
    """
    if not references:
        return []
    merged = merge_quantities((ref.name, ref.quantity) for ref in map(_as_reference, references))
    result = [AggregatedIngredient(acc.display_name, acc.result()) for acc in merged.values()]
    result.sort(key=lambda x: x.name.lower())
    return result


def merge_aggregates(*lists: Iterable[AggregatedIngredient]) -> List[AggregatedIngredient]:
    """Merge already aggregated lists with the same rule, as if the inputs were aggregated together."""
    combined: List[AggregatedIngredient] = []
    for items in lists:
        combined.extend(items)
    return aggregate_ingredients(combined)


def generate_shopping_list(plan: MealPlan, recipe_store, *, distinct: bool = False) -> List[AggregatedIngredient]:
    """Compute the shopping list for a weekly plan.

    Args:
        plan: MealPlan whose filled slots select the recipes.
        recipe_store: collaborator exposing get_ingredients(recipe_id) -> list of references
            (None for an unknown recipe).
        distinct: If True, a recipe placed in several slots is counted once.
    """
    if plan is None:
        return []
    references: List[IngredientReference] = []
    for recipe_id in plan.selected_recipe_ids(distinct=distinct):
        ingredients = recipe_store.get_ingredients(recipe_id)
        if ingredients is None:
            logger.warning("Recipe %s is planned for week %s but was not found", recipe_id, plan.week_start_iso)
            continue
        references.extend(ingredients)
    shopping_list = aggregate_ingredients(references)
    logger.info("Generated shopping list for week %s: %d items from %d references",
                plan.week_start_iso, len(shopping_list), len(references))
    return shopping_list


__all__ = ['aggregate_ingredients', 'merge_aggregates', 'generate_shopping_list']

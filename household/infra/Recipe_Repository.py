"""Recipe store collaborators: get_ingredients(recipe_id) feeds the shopping list builder."""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from household.domain.Ingredient import IngredientReference
from household.infra.json_files import read_json
from household.infra.paths import RECIPES_FILE

logger = logging.getLogger(__name__)


def _references(recipe: dict) -> List[IngredientReference]:
    out = []
    for ing in recipe.get("ingredients") or []:
        if isinstance(ing, str):
            # older recipes list ingredient names only
            out.append(IngredientReference(ing))
        else:
            out.append(IngredientReference.from_dict(ing))
    return out


class InMemoryRecipeStore:
    def __init__(self, recipes: Optional[List[dict]] = None):
        self._recipes: Dict[str, dict] = {r["id"]: r for r in recipes or [] if r.get("id")}

    def list_recipes(self) -> List[dict]:
        return list(self._recipes.values())

    def get_ingredients(self, recipe_id: str) -> Optional[List[IngredientReference]]:
        recipe = self._recipes.get(recipe_id)
        return _references(recipe) if recipe is not None else None


class JsonRecipeStore:
    """Reads recipes ({id, title, ingredients: [{name, qty}]}) from a JSON file."""

    def __init__(self, path: Path = RECIPES_FILE):
        self.path = Path(path)

    def list_recipes(self) -> List[dict]:
        data = read_json(self.path, [])
        if not isinstance(data, list):
            logger.warning("Recipes file %s does not hold a list; returning no recipes", self.path)
            return []
        return [r for r in data if isinstance(r, dict)]

    def get_ingredients(self, recipe_id: str) -> Optional[List[IngredientReference]]:
        for recipe in self.list_recipes():
            if recipe.get("id") == recipe_id:
                return _references(recipe)
        return None

import unittest
from datetime import date
from household.domain.Ingredient import AggregatedIngredient, IngredientReference
from household.domain.Plan import MealPlan
from household.infra.Recipe_Repository import InMemoryRecipeStore
from household.logic.shopping.list_builder import (
    aggregate_ingredients, generate_shopping_list, merge_aggregates
)


def _as_tuples(items):
    return [(i.name, i.quantity) for i in items]


class TestAggregateIngredients(unittest.TestCase):

    def test_empty_input(self):
        self.assertEqual(aggregate_ingredients([]), [])

    def test_case_insensitive_merge_keeps_first_casing(self):
        result = aggregate_ingredients([
            {"name": "egg", "qty": 2},
            {"name": "Egg", "qty": "a dozen"},
        ])
        self.assertEqual(_as_tuples(result), [("egg", 2)])

    def test_sorted_by_name_case_insensitive(self):
        result = aggregate_ingredients([
            IngredientReference("onion", 1),
            IngredientReference("Garlic", 2),
            IngredientReference("basil"),
        ])
        self.assertEqual([i.name for i in result], ["basil", "Garlic", "onion"])

    def test_quantity_less_entry_is_kept(self):
        result = aggregate_ingredients([IngredientReference("Basil")])
        self.assertEqual(result, [AggregatedIngredient("Basil", None)])
        self.assertNotIn("qty", result[0].to_dict())

    def test_malformed_entries_do_not_raise(self):
        result = aggregate_ingredients([{"qty": 3}, {"name": "  "}, "Salt", {"name": "Flour", "qty": "2 cups"}])
        self.assertEqual(_as_tuples(result), [("Flour", "2 cups"), ("Salt", None)])

    def test_merging_aggregates_matches_direct_aggregation(self):
        a = [{"name": "Egg", "qty": 2}, {"name": "Beans", "qty": "1 can"}]
        b = [{"name": "egg", "qty": 3}, {"name": "beans", "qty": "2 cans"}, {"name": "Rice"}]
        merged = merge_aggregates(aggregate_ingredients(a), aggregate_ingredients(b))
        direct = aggregate_ingredients(a + b)
        self.assertEqual(merged, direct)
        self.assertEqual(_as_tuples(direct), [("Beans", "1 can, 2 cans"), ("Egg", 5), ("Rice", None)])


class TestGenerateShoppingList(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryRecipeStore([
            {"id": "pasta", "title": "Pasta", "ingredients": [
                {"name": "Spaghetti", "qty": "1"}, {"name": "Garlic", "qty": 2}]},
            {"id": "tacos", "title": "Tacos", "ingredients": [
                {"name": "garlic", "qty": 1}, {"name": "Cilantro", "qty": "to taste"}]},
        ])
        self.plan = MealPlan.empty_week(date(2025, 11, 26))

    def test_week_plan_aggregates_selected_recipes(self):
        self.plan.set_recipe(0, "dinner", "pasta")
        self.plan.set_recipe(1, "lunch", "tacos")
        self.plan.set_recipe(2, "dinner", "pasta")
        result = generate_shopping_list(self.plan, self.store)
        self.assertEqual(_as_tuples(result), [("Cilantro", "to taste"), ("Garlic", 5), ("Spaghetti", 2)])

    def test_distinct_counts_each_recipe_once(self):
        self.plan.set_recipe(0, "dinner", "pasta")
        self.plan.set_recipe(2, "dinner", "pasta")
        result = generate_shopping_list(self.plan, self.store, distinct=True)
        self.assertEqual(_as_tuples(result), [("Garlic", 2), ("Spaghetti", 1)])

    def test_unknown_recipe_contributes_nothing(self):
        self.plan.set_recipe(3, "breakfast", "missing")
        self.assertEqual(generate_shopping_list(self.plan, self.store), [])

    def test_empty_week(self):
        self.assertEqual(generate_shopping_list(self.plan, self.store), [])

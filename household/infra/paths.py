from household.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
CHORES_FILE = DATA_DIR / 'chores.json'
RECIPES_FILE = DATA_DIR / 'recipes.json'
MEMBERS_FILE = DATA_DIR / 'members.json'
GROCERY_FILE = DATA_DIR / 'grocery.json'
PLAN_FILE = DATA_DIR / 'meal_plans.json'

__all__ = ['DATA_DIR', 'CHORES_FILE', 'RECIPES_FILE', 'MEMBERS_FILE', 'GROCERY_FILE', 'PLAN_FILE']

"""Collaborator wiring for the API: file-backed stores under the configured data directory.

configure(data_dir) re-points every store, e.g. at a temporary directory in tests.
"""
from pathlib import Path
from typing import Optional

from household.infra.Chore_Repository import JsonChoreStore
from household.infra.Grocery_Repository import JsonGroceryStore
from household.infra.Member_Repository import JsonMemberRegistry
from household.infra.Plan_Repository import PlanRepository
from household.infra.Recipe_Repository import JsonRecipeStore
from household.infra.paths import (
    CHORES_FILE, DATA_DIR, GROCERY_FILE, MEMBERS_FILE, PLAN_FILE, RECIPES_FILE
)
from household.logic.rewards.ledger import RewardLedger

_state = {}


def configure(data_dir: Optional[Path] = None):
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    chores = JsonChoreStore(base / CHORES_FILE.name)
    members = JsonMemberRegistry(base / MEMBERS_FILE.name)
    _state.update(
        chore_store=chores,
        member_registry=members,
        ledger=RewardLedger(chores, members),
        recipe_store=JsonRecipeStore(base / RECIPES_FILE.name),
        grocery_store=JsonGroceryStore(base / GROCERY_FILE.name),
        plan_repository=PlanRepository(base / PLAN_FILE.name),
    )
    return _state


def ledger() -> RewardLedger:
    return _state['ledger']


def recipe_store() -> JsonRecipeStore:
    return _state['recipe_store']


def grocery_store() -> JsonGroceryStore:
    return _state['grocery_store']


def plan_repository() -> PlanRepository:
    return _state['plan_repository']


configure()

"""Meal plan persistence: one MealPlan per week, keyed by the ISO date of its Monday."""
import copy
import logging
from datetime import date, timedelta
from pathlib import Path
from threading import RLock
from typing import Dict, Optional

from household.domain.Plan import MealPlan, monday_of, parse_iso_date
from household.infra.json_files import atomic_write, read_json
from household.infra.paths import PLAN_FILE

logger = logging.getLogger(__name__)


class PlanRepository:
    """Stores weeks in a JSON object {weekStartIso: plan}. With path=None the store lives in memory."""

    def __init__(self, path: Optional[Path] = PLAN_FILE):
        self.path = Path(path) if path is not None else None
        self._memory: Dict[str, dict] = {}
        self._lock = RLock()

    def _load_store(self) -> Dict[str, dict]:
        if self.path is None:
            return copy.deepcopy(self._memory)
        store = read_json(self.path, {})
        return store if isinstance(store, dict) else {}

    def _write_store(self, store: Dict[str, dict]) -> None:
        if self.path is None:
            self._memory = copy.deepcopy(store)
        else:
            atomic_write(self.path, store)

    def get_week(self, any_day: Optional[date] = None) -> MealPlan:
        '''Returns the plan of the week containing any_day (today by default), creating it empty if needed.'''
        monday = monday_of(any_day or date.today())
        key = monday.isoformat()
        with self._lock:
            store = self._load_store()
            if key not in store:
                store[key] = MealPlan.empty_week(monday).to_dict()
                self._write_store(store)
        return MealPlan.from_dict(store[key])

    def get_week_by_start(self, week_start_iso: str) -> MealPlan:
        return self.get_week(parse_iso_date(week_start_iso))

    def save_week(self, plan: MealPlan) -> MealPlan:
        with self._lock:
            store = self._load_store()
            store[plan.week_start_iso] = plan.to_dict()
            self._write_store(store)
        return plan

    def set_recipe(self, week_start_iso: str, day_index: int, slot: str, recipe_id: Optional[str]) -> MealPlan:
        with self._lock:
            plan = self.get_week_by_start(week_start_iso)
            plan.set_recipe(day_index, slot, recipe_id)
            return self.save_week(plan)

    def clear_week(self, week_start_iso: str) -> MealPlan:
        with self._lock:
            plan = self.get_week_by_start(week_start_iso)
            plan.clear()
            logger.info("Cleared meal plan for week %s", plan.week_start_iso)
            return self.save_week(plan)

    def shift_week(self, week_start_iso: str, offset_weeks: int) -> MealPlan:
        '''Previous/next week relative to week_start_iso (offset -1 / +1).'''
        return self.get_week(parse_iso_date(week_start_iso) + timedelta(weeks=offset_weeks))

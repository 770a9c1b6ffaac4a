"""Plan domain entity: a Monday..Sunday week of breakfast/lunch/dinner slots holding recipe ids."""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from household.utilities.constants import DAY_LABELS, ISO_DATE_FORMAT, MEAL_SLOTS


def monday_of(any_day: date) -> date:
    return any_day - timedelta(days=any_day.weekday())


def parse_iso_date(value: str) -> date:
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


class MealPlanDay:
    def __init__(self, date_iso: str, label: str, slots: Optional[Dict[str, Optional[str]]] = None):
        self.date_iso = date_iso
        self.label = label
        s = slots or {}
        self.slots = {slot: (s.get(slot) or None) for slot in MEAL_SLOTS}

    def to_dict(self):
        return {"dateIso": self.date_iso, "label": self.label, "slots": dict(self.slots)}

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealPlanDay(d.get("dateIso", ""), d.get("label", ""), d.get("slots"))


class MealPlan:
    def __init__(self, week_start_iso: str, days: List[MealPlanDay]):
        self.week_start_iso = week_start_iso
        self.days = days

    @classmethod
    def empty_week(cls, any_day: date) -> "MealPlan":
        '''Builds an empty plan for the week (Monday first) containing any_day.'''
        monday = monday_of(any_day)
        days = [MealPlanDay((monday + timedelta(days=i)).strftime(ISO_DATE_FORMAT), DAY_LABELS[i])
                for i in range(7)]
        return cls(monday.strftime(ISO_DATE_FORMAT), days)

    def set_recipe(self, day_index: int, slot: str, recipe_id: Optional[str]):
        if not 0 <= day_index < len(self.days):
            raise ValueError(f"Invalid day index: {day_index}")
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Invalid meal slot: {slot}")
        self.days[day_index].slots[slot] = recipe_id or None

    def clear(self):
        for day in self.days:
            for slot in MEAL_SLOTS:
                day.slots[slot] = None

    def selected_recipe_ids(self, *, distinct: bool = False) -> List[str]:
        """Recipe ids of the filled slots in day/slot order.

        A recipe placed in several slots is listed once per slot unless distinct=True.
        """
        ids: List[str] = []
        for day in self.days:
            for slot in MEAL_SLOTS:
                recipe_id = day.slots.get(slot)
                if not recipe_id:
                    continue
                if distinct and recipe_id in ids:
                    continue
                ids.append(recipe_id)
        return ids

    def __str__(self) -> str:
        return f"Week of {self.week_start_iso} - {len(self.selected_recipe_ids())} meals planned"

    __repr__ = __str__

    def to_dict(self):
        return {"weekStartIso": self.week_start_iso, "days": [d.to_dict() for d in self.days]}

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealPlan(d.get("weekStartIso", ""), [MealPlanDay.from_dict(x) for x in d.get("days", [])])

"""GroceryList aggregate: the household shopping list, editable by hand or replaced from a meal plan."""
from typing import List, Optional
from uuid import uuid4

from household.domain.Ingredient import AggregatedIngredient
from household.events.Event_Bus import GLOBAL_EVENT_BUS, GROCERY_REPLACED


def _qty_text(qty) -> str:
    # The grocery list stores quantities as text
    if qty is None:
        return ""
    return str(qty)


class GroceryItem:
    def __init__(self, name: str, qty: str = "", id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.name = name
        self.qty = qty

    def __str__(self) -> str:
        return f"{self.name} - {self.qty}" if self.qty else self.name

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return GroceryItem(d.get("name") or "", _qty_text(d.get("qty")), d.get("id"))

    def to_dict(self):
        return {"id": self.id, "name": self.name, "qty": self.qty}


class GroceryList:
    def __init__(self, items: Optional[List[GroceryItem]] = None):
        self.items: List[GroceryItem] = items[:] if items else []
        self._event_bus = GLOBAL_EVENT_BUS

    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def add_item(self, name: str, qty=None) -> GroceryItem:
        '''
        Adds an item to the top of the list.
        '''
        item = GroceryItem(name, _qty_text(qty))
        self.items.insert(0, item)
        return item

    def remove_item(self, item_id: str) -> bool:
        '''
        Removes the item with the given id. Returns False if it was not on the list.
        '''
        for i, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[i]
                return True
        return False

    def clear(self):
        self.items = []

    def replace_with(self, generated: List[AggregatedIngredient]) -> List[GroceryItem]:
        '''
        Replaces the whole list with generated items (e.g. from the weekly meal plan).
        '''
        self.items = [GroceryItem(g.name, _qty_text(g.quantity)) for g in generated]
        self._event_bus.publish(GROCERY_REPLACED, {"count": len(self.items)})
        return self.items

    def get_items(self):
        return self.items

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Grocery List:\n\t{items_str}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return GroceryList([GroceryItem.from_dict(d) for d in data or []])

    def to_dict(self):
        return [item.to_dict() for item in self.items]

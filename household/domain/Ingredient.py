"""Ingredient values: raw references pulled from recipes and the aggregated shopping-list form."""
import math
from typing import NamedTuple, Optional, Union

RawQuantity = Union[int, float, str, None]

QTY_ABSENT = "absent"
QTY_NUMBER = "number"
QTY_TEXT = "text"


class Quantity(NamedTuple):
    """Tagged form of a free-form recipe quantity: kind is one of absent / number / text."""
    kind: str
    value: Union[int, float, str, None] = None

    @staticmethod
    def parse(raw: RawQuantity) -> "Quantity":
        '''Classifies a raw quantity. Blank text is absent, finite numbers (or numeric text) are numbers.'''
        if raw is None:
            return Quantity(QTY_ABSENT)
        if isinstance(raw, bool):
            return Quantity(QTY_TEXT, str(raw).lower())
        if isinstance(raw, (int, float)):
            if isinstance(raw, float) and not math.isfinite(raw):
                return Quantity(QTY_TEXT, str(raw))
            return Quantity(QTY_NUMBER, raw)
        text = str(raw).strip()
        if not text:
            return Quantity(QTY_ABSENT)
        number = _parse_number(text)
        if number is None:
            return Quantity(QTY_TEXT, text)
        return Quantity(QTY_NUMBER, number)


def _parse_number(text: str):
    # float() would also accept digit separators like "1_000"
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


class IngredientReference:
    def __init__(self, name: str = "", quantity: RawQuantity = None):
        self.name = name
        self.quantity = quantity

    def __str__(self) -> str:
        if self.quantity is None or self.quantity == "":
            return self.name
        return f"{self.name} - {self.quantity}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Accepts {name, qty} (recipe/grocery form) or {name, quantity}.'''
        d = dict(data) if isinstance(data, dict) else {}
        qty = d.get("qty", d.get("quantity"))
        return IngredientReference(d.get("name") or "", qty)

    def to_dict(self):
        return {"name": self.name, "qty": self.quantity}


class AggregatedIngredient:
    def __init__(self, name: str, quantity: Optional[Union[int, float, str]] = None):
        self.name = name
        self.quantity = quantity

    def __eq__(self, other):
        return (isinstance(other, AggregatedIngredient)
                and self.name == other.name and self.quantity == other.quantity)

    def __str__(self) -> str:
        return self.name if self.quantity is None else f"{self.name} - {self.quantity}"

    __repr__ = __str__

    def to_reference(self) -> IngredientReference:
        return IngredientReference(self.name, self.quantity)

    def to_dict(self):
        out = {"name": self.name}
        if self.quantity is not None:
            out["qty"] = self.quantity
        return out

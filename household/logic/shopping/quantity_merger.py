"""Quantity merging for duplicate ingredients.

merge_quantities(pairs) collapses (name, raw quantity) pairs into one quantity per
aggregation key (trimmed, lower-cased name):

  - a numeric contribution is added to the key's running sum
  - a non-numeric contribution is appended to the key's text (", " joined, encounter order)
  - a blank or missing quantity contributes nothing

When a key received any numeric contribution the sum is its quantity and its text
contributions are dropped ("2" and "a pinch" -> 2). Otherwise the joined text is used,
and with no contributions at all the quantity is absent (None), which is not the same as 0.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple, Union

from household.domain.Ingredient import QTY_NUMBER, QTY_TEXT, Quantity, RawQuantity
from household.utilities.constants import QUANTITY_SEPARATOR

__all__ = ["MergedQuantity", "merge_quantities", "aggregation_key"]

FinalQuantity = Union[int, float, str, None]


def aggregation_key(name: Optional[str]) -> str:
    return _clean(name).lower()


def _clean(name) -> str:
    return "" if name is None else str(name).strip()


class MergedQuantity:
    """Running accumulator for one aggregation key."""

    def __init__(self, display_name: str):
        self.display_name = display_name
        self.total: Union[int, float, None] = None
        self.texts: List[str] = []

    def add(self, raw: RawQuantity) -> None:
        qty = Quantity.parse(raw)
        if qty.kind == QTY_NUMBER:
            self.total = qty.value if self.total is None else self.total + qty.value
        elif qty.kind == QTY_TEXT:
            self.texts.append(qty.value)

    def result(self) -> FinalQuantity:
        if self.total is not None:
            if isinstance(self.total, float) and self.total.is_integer():
                return int(self.total)
            return self.total
        if self.texts:
            return QUANTITY_SEPARATOR.join(self.texts)
        return None


def merge_quantities(pairs: Iterable[Tuple[Optional[str], RawQuantity]]) -> Dict[str, MergedQuantity]:
    """Merge (name, raw quantity) pairs by aggregation key.

    Returns an insertion-ordered dict key -> MergedQuantity. Pairs whose trimmed name is
    empty are skipped. The display name of each key is the first trimmed name seen.
    """
    merged: Dict[str, MergedQuantity] = {}
    for name, raw in pairs:
        key = aggregation_key(name)
        if not key:
            continue
        acc = merged.get(key)
        if acc is None:
            acc = merged[key] = MergedQuantity(_clean(name))
        acc.add(raw)
    return merged

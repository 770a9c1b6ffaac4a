"""Grocery list persistence (file-backed and in-memory)."""
import logging
from pathlib import Path
from threading import RLock
from typing import List, Optional

from household.domain.GroceryList import GroceryList
from household.infra.json_files import atomic_write, read_json
from household.infra.paths import GROCERY_FILE

logger = logging.getLogger(__name__)


class InMemoryGroceryStore:
    def __init__(self, items: Optional[List[dict]] = None):
        self._data = list(items or [])
        self.lock = RLock()

    def load(self) -> GroceryList:
        return GroceryList.from_dict(self._data)

    def save(self, grocery: GroceryList) -> GroceryList:
        self._data = grocery.to_dict()
        return grocery


class JsonGroceryStore:
    def __init__(self, path: Path = GROCERY_FILE):
        self.path = Path(path)
        self.lock = RLock()

    def load(self) -> GroceryList:
        data = read_json(self.path, [])
        if not isinstance(data, list):
            logger.warning("Grocery file %s does not hold a list; starting empty", self.path)
            data = []
        return GroceryList.from_dict(data)

    def save(self, grocery: GroceryList) -> GroceryList:
        atomic_write(self.path, grocery.to_dict())
        return grocery

"""Chore store collaborators: find_by_id / find_all / save / delete plus per-record locking."""
import copy
import logging
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Dict, List, Optional

from household.domain.Chore import ChoreRecord
from household.infra.json_files import atomic_write, read_json
from household.infra.paths import CHORES_FILE

logger = logging.getLogger(__name__)


class _RecordLock:
    def __init__(self):
        self.lock = RLock()
        self.users = 0


class ChoreStore:
    """Base store. Subclasses implement _load_all / _write_all.

    record_lock(chore_id) serializes read-modify-write cycles on one chore so two
    concurrent completions of the same chore cannot lose an entry. A lock entry
    lives only while some caller holds or waits for it.
    """

    def __init__(self):
        self._locks: Dict[str, _RecordLock] = {}
        self._locks_guard = Lock()
        self._io_lock = RLock()

    @contextmanager
    def record_lock(self, chore_id: str):
        with self._locks_guard:
            entry = self._locks.get(chore_id)
            if entry is None:
                entry = self._locks[chore_id] = _RecordLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if not entry.users:
                    del self._locks[chore_id]

    def _load_all(self) -> List[ChoreRecord]:
        raise NotImplementedError

    def _write_all(self, chores: List[ChoreRecord]) -> None:
        raise NotImplementedError

    def find_all(self) -> List[ChoreRecord]:
        with self._io_lock:
            return self._load_all()

    def find_by_id(self, chore_id: str) -> Optional[ChoreRecord]:
        for chore in self.find_all():
            if chore.id == chore_id:
                return chore
        return None

    def save(self, record: ChoreRecord) -> ChoreRecord:
        '''Insert or replace the record with the same id.'''
        with self._io_lock:
            chores = self._load_all()
            for i, existing in enumerate(chores):
                if existing.id == record.id:
                    chores[i] = record
                    break
            else:
                chores.append(record)
            self._write_all(chores)
        return record

    def delete(self, chore_id: str) -> bool:
        '''Remove the chore. Returns False if there was nothing to remove.'''
        with self._io_lock:
            chores = self._load_all()
            remaining = [c for c in chores if c.id != chore_id]
            if len(remaining) == len(chores):
                return False
            self._write_all(remaining)
        return True


class InMemoryChoreStore(ChoreStore):
    """Keeps records in memory. Reads hand out copies so unsaved changes never leak in."""

    def __init__(self, chores: Optional[List[ChoreRecord]] = None):
        super().__init__()
        self._chores: List[ChoreRecord] = copy.deepcopy(chores) if chores else []

    def _load_all(self) -> List[ChoreRecord]:
        return copy.deepcopy(self._chores)

    def _write_all(self, chores: List[ChoreRecord]) -> None:
        self._chores = copy.deepcopy(chores)


class JsonChoreStore(ChoreStore):
    """Persists chores as a JSON list in a single file."""

    def __init__(self, path: Path = CHORES_FILE):
        super().__init__()
        self.path = Path(path)

    def _load_all(self) -> List[ChoreRecord]:
        data = read_json(self.path, [])
        if not isinstance(data, list):
            logger.warning("Chores file %s does not hold a list; ignoring its content", self.path)
            return []
        return [ChoreRecord.from_dict(entry) for entry in data]

    def _write_all(self, chores: List[ChoreRecord]) -> None:
        atomic_write(self.path, [c.to_dict() for c in chores])
        logger.debug("Wrote %d chores to %s", len(chores), self.path)

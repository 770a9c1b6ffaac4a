"""Member registry collaborators: list_members() returns the ids eligible for rewards."""
import logging
from pathlib import Path
from typing import List, Optional

from household.infra.json_files import read_json
from household.infra.paths import MEMBERS_FILE

logger = logging.getLogger(__name__)


class InMemoryMemberRegistry:
    def __init__(self, member_ids: Optional[List[str]] = None):
        self._member_ids = list(member_ids or [])

    def list_members(self) -> List[str]:
        return list(self._member_ids)


class JsonMemberRegistry:
    """Members file holds a list of ids or of {id, name, role} objects."""

    def __init__(self, path: Path = MEMBERS_FILE):
        self.path = Path(path)

    def list_members(self) -> List[str]:
        data = read_json(self.path, [])
        ids: List[str] = []
        for entry in data if isinstance(data, list) else []:
            member_id = entry.get("id") if isinstance(entry, dict) else entry
            if isinstance(member_id, str) and member_id.strip() and member_id not in ids:
                ids.append(member_id)
        return ids

"""Chore domain entities: ChoreRecord aggregate with its completion history and planned assignments."""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from household.utilities.config import DEFAULT_REWARD_CURRENCY
from household.utilities.constants import ISO_DATE_FORMAT, DEFAULT_PRIORITY


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_number(value: Decimal):
    """Render a Decimal amount as a JSON friendly int/float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _parse_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return datetime.fromisoformat(text)
    return None


def _parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        return datetime.strptime(value.strip()[:10], ISO_DATE_FORMAT).date()
    return None


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(ISO_DATE_FORMAT) if value else None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class CompletionEntry:
    """One recorded instance of a chore being finished.

    The paid flag only moves from False to True; there is no way to clear it.
    """

    def __init__(self, occurred_on: datetime, member_id: Optional[str] = None, paid: bool = False):
        self.occurred_on = occurred_on
        self.member_id = member_id or None
        self._paid = bool(paid)

    @property
    def paid(self) -> bool:
        return self._paid

    def mark_paid(self) -> bool:
        '''Flips the entry to paid. Returns True if it was unpaid before.'''
        if self._paid:
            return False
        self._paid = True
        return True

    def is_outstanding_for(self, member_id: str) -> bool:
        return not self._paid and self.member_id is not None and self.member_id == member_id

    def __str__(self) -> str:
        who = self.member_id or "unattributed"
        state = "paid" if self._paid else "unpaid"
        return f"{self.occurred_on.isoformat()} - {who} - {state}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        occurred_on = _parse_datetime(d.get("on") or d.get("occurred_on")) or utc_now()
        return CompletionEntry(occurred_on, d.get("memberId") or d.get("member_id"), bool(d.get("paid", False)))

    def to_dict(self):
        out = {"on": _format_datetime(self.occurred_on), "paid": self._paid}
        if self.member_id is not None:
            out["memberId"] = self.member_id
        return out


class AssignedTo:
    def __init__(self, name: str = "", role: str = ""):
        self.name = name
        self.role = role

    def __eq__(self, other):
        return isinstance(other, AssignedTo) and (self.name, self.role) == (other.name, other.role)

    def __str__(self) -> str:
        return f"{self.name} ({self.role})" if self.role else self.name

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            return None
        return AssignedTo(data.get("name") or "", data.get("role") or "")

    def to_dict(self):
        return {"name": self.name, "role": self.role}


class Recurrence:
    def __init__(self, freq: str, by_day: Optional[List[int]] = None, interval: int = 1):
        self.freq = freq
        self.by_day = by_day[:] if by_day else []
        self.interval = interval

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict) or not data.get("freq"):
            return None
        return Recurrence(data["freq"], data.get("byDay") or [], data.get("interval") or 1)

    def to_dict(self):
        return {"freq": self.freq, "byDay": self.by_day, "interval": self.interval}


class ChoreAssignment:
    """A planned assignment of the chore to a member (who/when), separate from actual completions."""

    def __init__(self, member_id: str, due_date: Optional[date] = None,
                 recurrence: Optional[Recurrence] = None, points: Decimal = Decimal(0)):
        self.member_id = member_id
        self.due_date = due_date
        self.recurrence = recurrence
        self.points = points

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ChoreAssignment(
            d.get("memberId", ""),
            _parse_date(d.get("dueDate")),
            Recurrence.from_dict(d.get("recurrence")),
            Decimal(str(d.get("points") or 0)),
        )

    def to_dict(self):
        out = {"memberId": self.member_id, "dueDate": _format_date(self.due_date), "points": to_number(self.points)}
        if self.recurrence:
            out["recurrence"] = self.recurrence.to_dict()
        return out


class ChoreRecord:
    def __init__(self, id: str, title: str, priority: str = DEFAULT_PRIORITY, due_date: Optional[date] = None,
                 reward_amount: Decimal = Decimal(0), reward_currency: str = DEFAULT_REWARD_CURRENCY,
                 assigned_to: Optional[AssignedTo] = None, completions: Optional[List[CompletionEntry]] = None,
                 active: bool = True, notes: str = "", assignments: Optional[List[ChoreAssignment]] = None,
                 created_at: Optional[datetime] = None, updated_at: Optional[datetime] = None):
        self.id = id
        self.title = title
        self.priority = priority
        self.due_date = due_date
        self.reward_amount = reward_amount
        self.reward_currency = reward_currency
        self.assigned_to = assigned_to
        self.completions = completions[:] if completions else []
        self.active = active
        self.notes = notes
        self.assignments = assignments[:] if assignments else []
        self.created_at = created_at or utc_now()
        self.updated_at = updated_at or self.created_at

    def add_completion(self, member_id: Optional[str] = None) -> CompletionEntry:
        '''Appends a new unpaid completion stamped with the current time.'''
        entry = CompletionEntry(utc_now(), member_id, paid=False)
        self.completions.append(entry)
        return entry

    def mark_all_paid(self) -> int:
        '''Marks every unpaid completion as paid. Returns how many entries changed.'''
        return sum(1 for entry in self.completions if entry.mark_paid())

    def mark_member_paid(self, member_id: str) -> int:
        '''Marks the unpaid completions attributed to member_id as paid. Returns how many changed.'''
        return sum(1 for entry in self.completions if entry.is_outstanding_for(member_id) and entry.mark_paid())

    def has_outstanding_for(self, member_id: str) -> bool:
        return any(entry.is_outstanding_for(member_id) for entry in self.completions)

    def first_due_date(self) -> Optional[date]:
        '''Prefers the chore due date, falls back to the first assignment's due date.'''
        if self.due_date:
            return self.due_date
        if self.assignments:
            return self.assignments[0].due_date
        return None

    def touch(self):
        self.updated_at = utc_now()

    def __str__(self) -> str:
        unpaid = sum(1 for entry in self.completions if not entry.paid)
        return (f"{self.title} [{self.priority}] - Reward: {self.reward_amount} {self.reward_currency}"
                f" - Completions: {len(self.completions)} ({unpaid} unpaid)")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a ChoreRecord from its persisted dict form. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        raw_completions = d.get("completions", d.get("completed")) or []
        return ChoreRecord(
            id=d.get("id") or d.get("_id") or "",
            title=d.get("title", ""),
            priority=d.get("priority") or DEFAULT_PRIORITY,
            due_date=_parse_date(d.get("dueDate")),
            reward_amount=Decimal(str(d.get("rewardAmount") or 0)),
            reward_currency=d.get("rewardCurrency") or DEFAULT_REWARD_CURRENCY,
            assigned_to=AssignedTo.from_dict(d.get("assignedTo")),
            completions=[CompletionEntry.from_dict(c) for c in raw_completions],
            active=d.get("active", True),
            notes=d.get("notes") or "",
            assignments=[ChoreAssignment.from_dict(a) for a in d.get("assignments") or []],
            created_at=_parse_datetime(d.get("createdAt")),
            updated_at=_parse_datetime(d.get("updatedAt")),
        )

    def to_dict(self):
        '''Converts the ChoreRecord to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "priority": self.priority,
            "dueDate": _format_date(self.due_date),
            "rewardAmount": to_number(self.reward_amount),
            "rewardCurrency": self.reward_currency,
            "assignedTo": self.assigned_to.to_dict() if self.assigned_to else None,
            "assignments": [a.to_dict() for a in self.assignments],
            "completions": [c.to_dict() for c in self.completions],
            "active": self.active,
            "createdAt": _format_datetime(self.created_at),
            "updatedAt": _format_datetime(self.updated_at),
        }

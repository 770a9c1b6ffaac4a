"""Chore reward ledger.

RewardLedger owns the chore lifecycle (create/update/delete), the completion history
(record_completion) and the payment reconciliation (mark_chore_paid, pay_member).
Storage is an injected chore store exposing find_by_id / find_all / save / delete and
record_lock(chore_id); each read-modify-write of one chore runs under that lock.

Failures propagate to the caller and are never retried here:
  - ValidationError for malformed input, raised before anything is loaded or saved
  - NotFoundError when a chore id does not resolve
pay_member is a batch over several chores without cross-record atomicity: if a save
fails midway the chores already saved stay paid, and re-running it only flips the
entries that are still unpaid.
"""
import logging
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from household.domain.Chore import (
    AssignedTo, ChoreAssignment, ChoreRecord, Recurrence, utc_now
)
from household.domain.errors import NotFoundError, ValidationError
from household.events.Event_Bus import (
    GLOBAL_EVENT_BUS, CHORE_COMPLETED, CHORE_CREATED, CHORE_DELETED, CHORE_PAID,
    CHORE_UPDATED, MEMBER_PAID
)
from household.logic.rewards.totals import (
    compute_member_paid_totals, compute_member_totals, summarize_members
)
from household.utilities.validators import (
    ChoreInput, ChorePatch, CompletionInput, PayMemberInput, validate_payload
)

logger = logging.getLogger(__name__)

ChoreRef = Union[str, ChoreRecord]

# payload key -> ChoreRecord attribute
_FIELD_MAP = {
    "title": "title",
    "notes": "notes",
    "priority": "priority",
    "dueDate": "due_date",
    "rewardAmount": "reward_amount",
    "rewardCurrency": "reward_currency",
    "assignedTo": "assigned_to",
    "assignments": "assignments",
    "active": "active",
}


def _to_domain(field: str, value: Any):
    if field == "assignedTo":
        return AssignedTo(value.name or "", value.role or "") if value is not None else None
    if field == "assignments":
        return [
            ChoreAssignment(
                a.memberId,
                a.dueDate,
                Recurrence(a.recurrence.freq, a.recurrence.byDay, a.recurrence.interval) if a.recurrence else None,
                a.points,
            )
            for a in value or []
        ]
    return value


def _chore_id(chore: ChoreRef) -> str:
    return chore.id if isinstance(chore, ChoreRecord) else chore


def newest_first(chores: List[ChoreRecord]) -> List[ChoreRecord]:
    return sorted(chores, key=lambda c: c.created_at, reverse=True)


class RewardLedger:
    def __init__(self, chore_store, member_registry=None, event_bus=GLOBAL_EVENT_BUS):
        self._store = chore_store
        self._members = member_registry
        self._event_bus = event_bus

    # --- Lifecycle -----------------------------------------------------------
    def create_chore(self, fields: Optional[Dict[str, Any]]) -> ChoreRecord:
        values = validate_payload(ChoreInput, fields)
        chore = ChoreRecord(id=uuid4().hex, title=values["title"])
        for key, attr in _FIELD_MAP.items():
            setattr(chore, attr, _to_domain(key, values[key]))
        self._store.save(chore)
        logger.info("Created chore %s (%s), reward %s %s", chore.id, chore.title,
                    chore.reward_amount, chore.reward_currency)
        self._event_bus.publish(CHORE_CREATED, {"chore_id": chore.id, "title": chore.title})
        return chore

    def update_chore(self, chore_id: str, patch: Optional[Dict[str, Any]]) -> ChoreRecord:
        '''Applies the fields present in patch. Completions and ids are never patched.'''
        changes = validate_payload(ChorePatch, patch, partial=True)
        if "rewardCurrency" in changes and changes["rewardCurrency"] is None:
            del changes["rewardCurrency"]
        with self._store.record_lock(chore_id):
            chore = self._load(chore_id)
            for key, value in changes.items():
                setattr(chore, _FIELD_MAP[key], _to_domain(key, value))
            chore.touch()
            self._store.save(chore)
        logger.info("Updated chore %s fields=%s", chore_id, sorted(changes))
        self._event_bus.publish(CHORE_UPDATED, {"chore_id": chore.id, "title": chore.title})
        return chore

    def delete_chore(self, chore_id: str) -> None:
        with self._store.record_lock(chore_id):
            chore = self._load(chore_id)
            if not self._store.delete(chore_id):
                raise NotFoundError(chore_id)
        unpaid = sum(1 for e in chore.completions if not e.paid)
        if unpaid:
            logger.warning("Deleted chore %s with %d unpaid completions", chore_id, unpaid)
        else:
            logger.info("Deleted chore %s", chore_id)
        self._event_bus.publish(CHORE_DELETED, {"chore_id": chore_id, "title": chore.title})

    def get_chore(self, chore_id: str) -> ChoreRecord:
        return self._load(chore_id)

    def list_chores(self) -> List[ChoreRecord]:
        '''All chores, newest first.'''
        return newest_first(self._store.find_all())

    # --- Completions & payments -----------------------------------------------
    def record_completion(self, chore: ChoreRef, member_id: Optional[str] = None) -> ChoreRecord:
        '''Appends an unpaid completion (now, member_id or unattributed). The reward fields are untouched.'''
        member_id = validate_payload(CompletionInput, {"memberId": member_id})["memberId"]
        chore_id = _chore_id(chore)
        with self._store.record_lock(chore_id):
            record = self._load(chore_id)
            record.add_completion(member_id)
            record.touch()
            self._store.save(record)
        logger.info("Chore %s completed by %s", chore_id, member_id or "<unattributed>")
        self._event_bus.publish(CHORE_COMPLETED, {"chore_id": chore_id, "title": record.title, "member_id": member_id})
        return record

    def mark_chore_paid(self, chore: ChoreRef) -> ChoreRecord:
        '''Marks every unpaid completion of the chore as paid. Calling it again changes nothing.'''
        chore_id = _chore_id(chore)
        with self._store.record_lock(chore_id):
            record = self._load(chore_id)
            changed = record.mark_all_paid()
            if changed:
                record.touch()
                self._store.save(record)
        logger.info("Chore %s marked paid (%d entries)", chore_id, changed)
        if changed:
            self._event_bus.publish(CHORE_PAID, {"chore_id": chore_id, "title": record.title, "entries": changed})
        return record

    def pay_member(self, member_id: str) -> List[ChoreRecord]:
        """Marks every unpaid completion attributed to member_id, across all chores, as paid.

        Returns the refreshed list of all chores (newest first). A failing save propagates
        immediately; chores saved before it keep their paid entries.
        """
        member_id = validate_payload(PayMemberInput, {"memberId": member_id})["memberId"]
        candidates = [c.id for c in self._store.find_all() if c.has_outstanding_for(member_id)]
        chores_paid = entries_paid = 0
        for chore_id in candidates:
            with self._store.record_lock(chore_id):
                record = self._store.find_by_id(chore_id)
                if record is None:
                    logger.info("Chore %s vanished before paying %s; skipping", chore_id, member_id)
                    continue
                changed = record.mark_member_paid(member_id)
                if not changed:
                    continue
                record.touch()
                try:
                    self._store.save(record)
                except Exception:
                    logger.error("pay_member(%s) failed on chore %s after %d chores were paid",
                                 member_id, chore_id, chores_paid)
                    raise
            chores_paid += 1
            entries_paid += changed
        logger.info("Paid member %s: %d entries over %d chores", member_id, entries_paid, chores_paid)
        self._event_bus.publish(MEMBER_PAID, {"member_id": member_id, "chores": chores_paid, "entries": entries_paid})
        return self.list_chores()

    # --- Read-side projections -----------------------------------------------
    def member_ids(self) -> List[str]:
        return self._members.list_members() if self._members is not None else []

    def member_totals(self):
        '''Outstanding reward per registered member, recomputed from the full chore set.'''
        return compute_member_totals(self._store.find_all(), self.member_ids())

    def member_paid_totals(self):
        return compute_member_paid_totals(self._store.find_all(), self.member_ids())

    def member_summary(self):
        return summarize_members(self._store.find_all(), self.member_ids())

    # --- Helpers --------------------------------------------------------------
    def _load(self, chore_id: str) -> ChoreRecord:
        if not isinstance(chore_id, str) or not chore_id:
            raise NotFoundError(chore_id)
        record = self._store.find_by_id(chore_id)
        if record is None:
            logger.warning("Chore %s not found", chore_id)
            raise NotFoundError(chore_id)
        return record


__all__ = ['RewardLedger', 'newest_first', 'ValidationError', 'NotFoundError']

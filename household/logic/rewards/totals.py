"""Member reward projections.

Read-side helpers over a snapshot of chores; none of them mutate the chores they are given.
compute_member_totals is the "what do we still owe" view: only unpaid completions count,
so entries disappear from it once they are paid.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from household.domain.Chore import ChoreRecord, to_number

__all__ = ["compute_member_totals", "compute_member_paid_totals", "summarize_members"]


def _sum_rewards(chores: Iterable[ChoreRecord], members: Iterable[str], *, paid: bool) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = {m: Decimal(0) for m in members}
    for chore in chores:
        # Zero-reward chores never move a total, whatever their completions
        if not chore.reward_amount:
            continue
        for entry in chore.completions:
            if entry.paid != paid or entry.member_id not in totals:
                continue
            totals[entry.member_id] += chore.reward_amount
    return totals


def compute_member_totals(chores: Iterable[ChoreRecord], members: Iterable[str]) -> Dict[str, Decimal]:
    """Outstanding (unpaid) reward per known member id.

    Every member id gets an entry, 0 when nothing is owed. Completions without a
    member, or attributed to an id outside members, count for no one.
    """
    return _sum_rewards(chores, members, paid=False)


def compute_member_paid_totals(chores: Iterable[ChoreRecord], members: Iterable[str]) -> Dict[str, Decimal]:
    """Reward already paid out per known member id."""
    return _sum_rewards(chores, members, paid=True)


def summarize_members(chores: Iterable[ChoreRecord], members: Iterable[str]) -> List[Dict[str, Any]]:
    """Per-member summary in registry order.

    Returns:
        List of dicts: { memberId, outstanding, paid, unpaidCount, paidCount, currencies }.
    """
    chores = list(chores)
    members = list(dict.fromkeys(members))
    outstanding = compute_member_totals(chores, members)
    paid_out = compute_member_paid_totals(chores, members)
    summary: Dict[str, Dict[str, Any]] = {
        m: {"memberId": m, "unpaidCount": 0, "paidCount": 0, "currencies": set()} for m in members
    }
    for chore in chores:
        for entry in chore.completions:
            row = summary.get(entry.member_id)
            if row is None:
                continue
            row["paidCount" if entry.paid else "unpaidCount"] += 1
            if chore.reward_amount:
                row["currencies"].add(chore.reward_currency)
    result = []
    for m in members:
        row = summary[m]
        row["outstanding"] = to_number(outstanding[m])
        row["paid"] = to_number(paid_out[m])
        row["currencies"] = sorted(row["currencies"])
        result.append(row)
    return result

from typing import Optional

from fastapi import APIRouter, Body, Response

from household.api import dependencies
from household.api.errors import http_errors
from household.domain.Chore import to_number

router = APIRouter(prefix="/api/chores", tags=["chores"])
members_router = APIRouter(prefix="/api/members", tags=["members"])


@router.get("")
def list_chores():
    """All chores, newest first."""
    return [c.to_dict() for c in dependencies.ledger().list_chores()]


@router.post("", status_code=201)
def create_chore(data: Optional[dict] = Body(default=None)):
    with http_errors():
        chore = dependencies.ledger().create_chore(data)
    return chore.to_dict()


@router.post("/pay-member")
def pay_member(data: Optional[dict] = Body(default=None)):
    """Pay out every unpaid completion of one member; returns the refreshed chore list."""
    member_id = (data or {}).get("memberId")
    with http_errors():
        chores = dependencies.ledger().pay_member(member_id)
    return [c.to_dict() for c in chores]


@router.get("/{chore_id}")
def get_chore(chore_id: str):
    with http_errors():
        return dependencies.ledger().get_chore(chore_id).to_dict()


@router.put("/{chore_id}")
def update_chore(chore_id: str, data: Optional[dict] = Body(default=None)):
    with http_errors():
        return dependencies.ledger().update_chore(chore_id, data).to_dict()


@router.delete("/{chore_id}", status_code=204)
def delete_chore(chore_id: str):
    with http_errors():
        dependencies.ledger().delete_chore(chore_id)
    return Response(status_code=204)


@router.post("/{chore_id}/complete")
def complete_chore(chore_id: str, data: Optional[dict] = Body(default=None)):
    member_id = (data or {}).get("memberId")
    with http_errors():
        return dependencies.ledger().record_completion(chore_id, member_id).to_dict()


@router.post("/{chore_id}/pay")
def pay_chore(chore_id: str):
    with http_errors():
        return dependencies.ledger().mark_chore_paid(chore_id).to_dict()


@members_router.get("/totals")
def member_totals():
    """Outstanding (unpaid) reward per registered member."""
    totals = dependencies.ledger().member_totals()
    return {member_id: to_number(amount) for member_id, amount in totals.items()}


@members_router.get("/summary")
def member_summary():
    return dependencies.ledger().member_summary()

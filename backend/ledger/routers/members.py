"""Roster: invite, list, get, update, remove, accept/reject invitations."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ledger.schemas import Member, MemberCreate, MemberUpdate
from ledger.store import HouseholdStore, get_store

router = APIRouter(prefix="/members", tags=["members"])


def _get_member_or_404(store: HouseholdStore, member_id: str) -> Member:
    member = store.get_member(member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


def _check_email_free(store: HouseholdStore, email: Optional[str], member_id: Optional[str] = None) -> None:
    if email and any(m.email == email and m.id != member_id for m in store.list_members()):
        raise HTTPException(status_code=400, detail="Email already on the roster")


@router.get("", response_model=list[Member])
def list_members(store: HouseholdStore = Depends(get_store)):
    return store.list_members()


@router.post("", response_model=Member)
def invite_member(data: MemberCreate, store: HouseholdStore = Depends(get_store)):
    if not data.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    _check_email_free(store, data.email)
    return store.add_member(data)


@router.get("/{member_id}", response_model=Member)
def get_member(member_id: str, store: HouseholdStore = Depends(get_store)):
    return _get_member_or_404(store, member_id)


@router.patch("/{member_id}", response_model=Member)
def update_member(member_id: str, data: MemberUpdate, store: HouseholdStore = Depends(get_store)):
    _get_member_or_404(store, member_id)
    if data.name is not None and not data.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    _check_email_free(store, data.email, member_id)
    return store.update_member(member_id, data)


@router.delete("/{member_id}", status_code=204)
def remove_member(member_id: str, store: HouseholdStore = Depends(get_store)):
    _get_member_or_404(store, member_id)
    if member_id == store.self_id:
        raise HTTPException(status_code=400, detail="Cannot remove yourself")
    store.remove_member(member_id)


@router.post("/{member_id}/accept", response_model=Member)
def accept_invitation(member_id: str, store: HouseholdStore = Depends(get_store)):
    _get_member_or_404(store, member_id)
    return store.accept_invitation(member_id)


@router.post("/{member_id}/reject", response_model=Member)
def reject_invitation(member_id: str, store: HouseholdStore = Depends(get_store)):
    member = _get_member_or_404(store, member_id)
    if member.id == store.self_id:
        raise HTTPException(status_code=400, detail="Cannot reject yourself")
    return store.reject_invitation(member_id)

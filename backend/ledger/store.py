"""In-memory household state: the roster and the expense list."""
import threading
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ledger import config
from ledger.log_config import get_logger
from ledger.schemas import (
    Expense, ExpenseCreate, ExpenseUpdate, Member, MemberCreate, MemberStatus, MemberUpdate,
)

logger = get_logger(__name__)


def _new_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class HouseholdStore:
    """
    Roster and expenses for one household.

    The acting user ("self") is created accepted and cannot be removed. Members
    keep insertion order, which is the order balances are reported in.
    """

    def __init__(self, self_name: str = config.SELF_NAME, self_email: Optional[str] = None):
        self._lock = threading.RLock()
        self.self_id = _new_id()
        self._members: dict[str, Member] = {
            self.self_id: Member(
                id=self.self_id,
                name=self_name,
                email=self_email,
                status=MemberStatus.ACCEPTED,
                joined_at=_now(),
                invited_by=self.self_id,
            )
        }
        self._expenses: dict[str, Expense] = {}

    # ----- Members -----
    def list_members(self) -> list[Member]:
        with self._lock:
            return list(self._members.values())

    def accepted_members(self) -> list[Member]:
        return [m for m in self.list_members() if m.status == MemberStatus.ACCEPTED]

    def get_member(self, member_id: str) -> Optional[Member]:
        with self._lock:
            return self._members.get(member_id)

    def add_member(self, data: MemberCreate) -> Member:
        member = Member(
            id=_new_id(),
            name=data.name,
            email=data.email,
            status=MemberStatus.PENDING,
            joined_at=_now(),
            invited_by=self.self_id,
        )
        with self._lock:
            self._members[member.id] = member
        logger.info("member_invited", member_id=member.id)
        return member

    def update_member(self, member_id: str, data: MemberUpdate) -> Optional[Member]:
        with self._lock:
            member = self._members.get(member_id)
            if member is None:
                return None
            member = member.model_copy(update=data.model_dump(exclude_unset=True, exclude_none=True))
            self._members[member_id] = member
            return member

    def set_status(self, member_id: str, status: MemberStatus) -> Optional[Member]:
        with self._lock:
            member = self._members.get(member_id)
            if member is None:
                return None
            member = member.model_copy(update={"status": status})
            self._members[member_id] = member
        logger.info("member_status_changed", member_id=member_id, status=status.value)
        return member

    def accept_invitation(self, member_id: str) -> Optional[Member]:
        return self.set_status(member_id, MemberStatus.ACCEPTED)

    def reject_invitation(self, member_id: str) -> Optional[Member]:
        return self.set_status(member_id, MemberStatus.REJECTED)

    def remove_member(self, member_id: str) -> bool:
        if member_id == self.self_id:
            return False
        with self._lock:
            removed = self._members.pop(member_id, None) is not None
        if removed:
            logger.info("member_removed", member_id=member_id)
        return removed

    # ----- Expenses -----
    def all_expenses(self) -> list[Expense]:
        with self._lock:
            return list(self._expenses.values())

    def visible_expenses(self) -> list[Expense]:
        """Expenses paid by an accepted member or by self."""
        accepted = {m.id for m in self.accepted_members()}
        return [
            e for e in self.all_expenses()
            if e.paid_by in accepted or e.paid_by == self.self_id
        ]

    def expenses_by_month(self, month: int, year: int) -> list[Expense]:
        return [e for e in self.visible_expenses() if e.date.month == month and e.date.year == year]

    def expenses_by_user(self, member_id: str) -> list[Expense]:
        return [e for e in self.visible_expenses() if e.paid_by == member_id]

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        with self._lock:
            return self._expenses.get(expense_id)

    def add_expense(self, data: ExpenseCreate) -> Expense:
        expense = Expense(id=_new_id(), **data.model_dump())
        with self._lock:
            self._expenses[expense.id] = expense
        logger.info("expense_added", expense_id=expense.id, amount=expense.amount, paid_by=expense.paid_by)
        return expense

    def update_expense(self, expense_id: str, data: ExpenseUpdate) -> Optional[Expense]:
        with self._lock:
            expense = self._expenses.get(expense_id)
            if expense is None:
                return None
            expense = expense.model_copy(update=data.model_dump(exclude_unset=True, exclude_none=True))
            self._expenses[expense_id] = expense
            return expense

    def delete_expense(self, expense_id: str) -> bool:
        with self._lock:
            removed = self._expenses.pop(expense_id, None) is not None
        if removed:
            logger.info("expense_deleted", expense_id=expense_id)
        return removed


_store: Optional[HouseholdStore] = None
_store_lock = threading.Lock()


def get_store() -> HouseholdStore:
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = HouseholdStore(config.SELF_NAME, config.SELF_EMAIL)
    return _store

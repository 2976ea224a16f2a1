"""Pydantic schemas for the ledger engine and the request/response bodies."""
from datetime import date as Date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


# ----- Member -----
class MemberStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class MemberBase(BaseModel):
    name: str
    email: Optional[EmailStr] = None


class MemberCreate(MemberBase):
    pass


class MemberUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None


class Member(MemberBase):
    id: str
    status: MemberStatus = MemberStatus.PENDING
    joined_at: Optional[datetime] = None
    invited_by: Optional[str] = None


# ----- Expense -----
EXPENSE_CATEGORIES = [
    "Groceries",
    "Rent",
    "Utilities",
    "Internet",
    "Streaming",
    "Household",
    "Entertainment",
    "Transportation",
    "Dining",
    "Other",
]

DEFAULT_CATEGORY = "Groceries"


class ExpenseBase(BaseModel):
    title: str
    # Non-finite and negative amounts never reach the calculators.
    amount: float = Field(ge=0, allow_inf_nan=False)
    category: str = DEFAULT_CATEGORY
    date: Date
    paid_by: str
    description: Optional[str] = None
    split_with: list[str]


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    title: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    date: Optional[Date] = None
    paid_by: Optional[str] = None
    description: Optional[str] = None
    split_with: Optional[list[str]] = None


class Expense(ExpenseBase):
    id: str


# ----- Balances -----
class Balance(BaseModel):
    member_id: str
    name: str
    owed: float = 0.0
    owes: float = 0.0
    net_balance: float = 0.0


class BalanceReport(BaseModel):
    balances: list[Balance] = []
    total_expenses: float = 0.0
    expense_per_person: float = 0.0


# ----- Settlement -----
class Transfer(BaseModel):
    from_member: str
    from_name: str
    to_member: str
    to_name: str
    amount: float


class SettlementSummary(BaseModel):
    report: BalanceReport
    transfers: list[Transfer]
    balanced: bool


# ----- Dashboard / reports -----
class CategoryTotal(BaseModel):
    category: str
    amount: float


class MemberSpending(BaseModel):
    member_id: str
    name: str
    paid: float
    owes: float = 0.0
    net_balance: float = 0.0


class DashboardStats(BaseModel):
    total_expenses: float
    expense_count: int
    expense_per_person: float
    your_balance: float
    category_totals: list[CategoryTotal]
    member_spending: list[MemberSpending]
    recent_expenses: list[Expense]


class MonthlyReport(BaseModel):
    month: int
    year: int
    report: BalanceReport
    transfers: list[Transfer]
    chart: list[MemberSpending]
    debtor_count: int
    creditor_count: int

"""Expenses: create, list, update, delete, export."""
import csv
import io
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from ledger.schemas import Expense, ExpenseCreate, ExpenseUpdate, EXPENSE_CATEGORIES
from ledger.store import HouseholdStore, get_store

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _check_expense(
    store: HouseholdStore,
    title: str,
    amount: float,
    category: str,
    paid_by: str,
    split_with: list[str],
) -> None:
    if not title.strip():
        raise HTTPException(status_code=400, detail="Title is required")
    if amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be a positive number")
    if category not in EXPENSE_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Invalid category. Must be one of: {', '.join(EXPENSE_CATEGORIES)}")
    if not store.get_member(paid_by):
        raise HTTPException(status_code=400, detail="Payer must be a household member")
    if not split_with:
        raise HTTPException(status_code=400, detail="Select at least one person to split with")
    if len(set(split_with)) != len(split_with):
        raise HTTPException(status_code=400, detail="Participants must be unique")
    if any(store.get_member(uid) is None for uid in split_with):
        raise HTTPException(status_code=400, detail="All participants must be household members")


def _get_expense_or_404(store: HouseholdStore, expense_id: str) -> Expense:
    expense = store.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("", response_model=Expense)
def create_expense(data: ExpenseCreate, store: HouseholdStore = Depends(get_store)):
    _check_expense(store, data.title, data.amount, data.category, data.paid_by, data.split_with)
    return store.add_expense(data)


@router.get("", response_model=list[Expense])
def list_expenses(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    paid_by: Optional[str] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    store: HouseholdStore = Depends(get_store),
):
    if (month is None) != (year is None):
        raise HTTPException(status_code=400, detail="month and year must be given together")

    if month is not None:
        expenses = store.expenses_by_month(month, year)
    elif paid_by:
        expenses = store.expenses_by_user(paid_by)
    else:
        expenses = store.visible_expenses()

    if paid_by:
        expenses = [e for e in expenses if e.paid_by == paid_by]
    if search:
        term = search.lower()
        expenses = [
            e for e in expenses
            if term in e.title.lower()
            or term in (e.description or "").lower()
            or term in e.category.lower()
        ]
    if category:
        expenses = [e for e in expenses if e.category == category]

    expenses = sorted(expenses, key=lambda e: e.date, reverse=True)
    return expenses[offset:offset + limit]


@router.get("/export")
def export_expenses(store: HouseholdStore = Depends(get_store)):
    expenses = sorted(store.visible_expenses(), key=lambda e: e.date, reverse=True)
    member_map = {m.id: m.name for m in store.list_members()}

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Title", "Category", "Amount", "Paid By", "Split With", "Description"])
    for e in expenses:
        writer.writerow([
            e.date.isoformat(),
            e.title,
            e.category,
            f"{e.amount:.2f}",
            member_map.get(e.paid_by, e.paid_by),
            ", ".join(member_map.get(uid, uid) for uid in e.split_with),
            e.description or "",
        ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )


@router.get("/{expense_id}", response_model=Expense)
def get_expense(expense_id: str, store: HouseholdStore = Depends(get_store)):
    return _get_expense_or_404(store, expense_id)


@router.patch("/{expense_id}", response_model=Expense)
def update_expense(expense_id: str, data: ExpenseUpdate, store: HouseholdStore = Depends(get_store)):
    expense = _get_expense_or_404(store, expense_id)
    _check_expense(
        store,
        data.title if data.title is not None else expense.title,
        data.amount if data.amount is not None else expense.amount,
        data.category if data.category is not None else expense.category,
        data.paid_by if data.paid_by is not None else expense.paid_by,
        data.split_with if data.split_with is not None else expense.split_with,
    )
    return store.update_expense(expense_id, data)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: str, store: HouseholdStore = Depends(get_store)):
    _get_expense_or_404(store, expense_id)
    store.delete_expense(expense_id)

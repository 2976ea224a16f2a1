"""Settlements: balances, who pays whom, dashboard and monthly report."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ledger import config
from ledger.schemas import DashboardStats, MonthlyReport, SettlementSummary
from ledger.services.balance_calculator import compute_balances
from ledger.services.reports import build_dashboard, build_monthly_report
from ledger.services.settlement_calculator import is_balanced, plan_settlement
from ledger.store import HouseholdStore, get_store

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.get("", response_model=SettlementSummary)
def get_settlements(store: HouseholdStore = Depends(get_store)):
    report = compute_balances(store.list_members(), store.visible_expenses())
    transfers = plan_settlement(report.balances, strict=config.SETTLEMENT_STRICT)
    return SettlementSummary(
        report=report,
        transfers=transfers,
        balanced=is_balanced(report.balances),
    )


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(store: HouseholdStore = Depends(get_store)):
    return build_dashboard(store.list_members(), store.visible_expenses(), store.self_id)


@router.get("/report", response_model=MonthlyReport)
def get_monthly_report(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1),
    store: HouseholdStore = Depends(get_store),
):
    if (month is None) != (year is None):
        raise HTTPException(status_code=400, detail="month and year must be given together")
    if month is None:
        today = date.today()
        month, year = today.month, today.year
    return build_monthly_report(
        store.list_members(),
        store.expenses_by_month(month, year),
        month,
        year,
        strict=config.SETTLEMENT_STRICT,
    )

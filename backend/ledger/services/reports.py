"""Dashboard and monthly report aggregation on top of the two calculators."""
from ledger.schemas import (
    BalanceReport, CategoryTotal, DashboardStats, Expense, Member, MemberSpending, MonthlyReport,
)
from ledger.services.balance_calculator import compute_balances
from ledger.services.settlement_calculator import plan_settlement, split_balances

RECENT_LIMIT = 5


def category_totals(expenses: list[Expense]) -> list[CategoryTotal]:
    totals: dict[str, float] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return [CategoryTotal(category=c, amount=round(a, 2)) for c, a in totals.items()]


def member_spending(members: list[Member], expenses: list[Expense], report: BalanceReport) -> list[MemberSpending]:
    """Paid / owes / net per roster entry; members without a balance entry show zeros."""
    by_id = {b.member_id: b for b in report.balances}
    rows = []
    for m in members:
        paid = sum(e.amount for e in expenses if e.paid_by == m.id)
        balance = by_id.get(m.id)
        rows.append(MemberSpending(
            member_id=m.id,
            name=m.name,
            paid=round(paid, 2),
            owes=round(balance.owes, 2) if balance else 0.0,
            net_balance=round(balance.net_balance, 2) if balance else 0.0,
        ))
    return rows


def build_dashboard(members: list[Member], expenses: list[Expense], self_id: str) -> DashboardStats:
    report = compute_balances(members, expenses)
    mine = next((b for b in report.balances if b.member_id == self_id), None)
    recent = sorted(expenses, key=lambda e: e.date, reverse=True)[:RECENT_LIMIT]
    return DashboardStats(
        total_expenses=round(report.total_expenses, 2),
        expense_count=len(expenses),
        expense_per_person=round(report.expense_per_person, 2),
        your_balance=round(mine.net_balance, 2) if mine else 0.0,
        category_totals=category_totals(expenses),
        member_spending=member_spending(members, expenses, report),
        recent_expenses=recent,
    )


def build_monthly_report(
    members: list[Member],
    expenses: list[Expense],
    month: int,
    year: int,
    strict: bool = False,
) -> MonthlyReport:
    """``expenses`` should already be restricted to the month."""
    report = compute_balances(members, expenses)
    transfers = plan_settlement(report.balances, strict=strict)
    debtors, creditors = split_balances(report.balances)
    return MonthlyReport(
        month=month,
        year=year,
        report=report,
        transfers=transfers,
        chart=member_spending(members, expenses, report),
        debtor_count=len(debtors),
        creditor_count=len(creditors),
    )

from datetime import date

from ledger.schemas import Expense, Member, MemberStatus
from ledger.services.reports import build_dashboard, build_monthly_report, category_totals

ROSTER = [
    Member(id="a", name="A", status=MemberStatus.ACCEPTED),
    Member(id="b", name="B", status=MemberStatus.ACCEPTED),
    Member(id="p", name="P", status=MemberStatus.PENDING),
]


def expense(eid, amount, paid_by, split_with, category="Groceries", day=1):
    return Expense(
        id=eid, title=eid, amount=amount, category=category, date=date(2024, 5, day),
        paid_by=paid_by, split_with=split_with,
    )


def test_category_totals_keep_first_seen_order():
    totals = category_totals([
        expense("e1", 10.0, "a", ["a"], "Rent"),
        expense("e2", 5.0, "a", ["a"], "Dining"),
        expense("e3", 2.5, "b", ["b"], "Rent"),
    ])
    assert [(t.category, t.amount) for t in totals] == [("Rent", 12.5), ("Dining", 5.0)]


def test_dashboard_recent_and_balance():
    expenses = [expense(f"e{d}", 10.0, "a", ["a", "b"], day=d) for d in range(1, 8)]
    stats = build_dashboard(ROSTER, expenses, "b")
    assert [e.id for e in stats.recent_expenses] == ["e7", "e6", "e5", "e4", "e3"]
    assert stats.your_balance == -35.0
    assert stats.total_expenses == 70.0
    assert stats.expense_per_person == 35.0
    assert [row.member_id for row in stats.member_spending] == ["a", "b", "p"]
    assert stats.member_spending[2].paid == 0.0


def test_dashboard_self_without_balance():
    stats = build_dashboard(ROSTER, [], "p")
    assert stats.your_balance == 0.0
    assert stats.expense_count == 0


def test_monthly_report_counts():
    report = build_monthly_report(ROSTER, [expense("e1", 50.0, "a", ["a", "b"])], 5, 2024)
    assert report.debtor_count == 1
    assert report.creditor_count == 1
    assert [(t.from_member, t.to_member, t.amount) for t in report.transfers] == [("b", "a", 25.0)]
    chart = {row.member_id: row for row in report.chart}
    assert chart["a"].paid == 50.0
    assert chart["b"].owes == 25.0

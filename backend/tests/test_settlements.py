import pytest

from ledger import config


@pytest.fixture
def household(client, self_id, second_member, third_member):
    return self_id, second_member["id"], third_member["id"]


def _add(client, payer, amount, split_with, date="2024-03-10", category="Groceries"):
    return client.post("/api/expenses", json={
        "title": "Shared", "amount": amount, "date": date, "category": category,
        "paid_by": payer, "split_with": split_with,
    })


def test_settlements_three_way(client, household):
    a, b, c = household
    _add(client, a, 90.0, [a, b, c])
    res = client.get("/api/settlements")
    assert res.status_code == 200
    data = res.json()
    nets = {bal["member_id"]: bal["net_balance"] for bal in data["report"]["balances"]}
    assert nets[a] == pytest.approx(60.0)
    assert nets[b] == pytest.approx(-30.0)
    assert nets[c] == pytest.approx(-30.0)
    assert data["balanced"] is True
    assert [(t["from_member"], t["to_member"], t["amount"]) for t in data["transfers"]] == [
        (b, a, 30.0),
        (c, a, 30.0),
    ]


def test_settlements_empty(client):
    data = client.get("/api/settlements").json()
    assert data["transfers"] == []
    assert data["report"]["total_expenses"] == 0


def test_unbalanced_report_dropped(client, self_id):
    pending = client.post("/api/members", json={"name": "Pending"}).json()
    _add(client, self_id, 100.0, [self_id, pending["id"]])
    data = client.get("/api/settlements").json()
    assert data["balanced"] is False
    assert data["transfers"] == []


def test_unbalanced_report_strict(client, self_id, monkeypatch):
    monkeypatch.setattr(config, "SETTLEMENT_STRICT", True)
    pending = client.post("/api/members", json={"name": "Pending"}).json()
    _add(client, self_id, 100.0, [self_id, pending["id"]])
    res = client.get("/api/settlements")
    assert res.status_code == 409
    assert res.json()["residual"] == 50.0


def test_dashboard(client, household):
    a, b, c = household
    _add(client, a, 60.0, [a, b], category="Dining")
    _add(client, b, 40.0, [a, b], category="Transportation")
    res = client.get("/api/settlements/dashboard")
    assert res.status_code == 200
    data = res.json()
    assert data["total_expenses"] == 100.0
    assert data["expense_count"] == 2
    assert data["expense_per_person"] == pytest.approx(33.33)
    assert data["your_balance"] == 10.0
    assert {t["category"]: t["amount"] for t in data["category_totals"]} == {
        "Dining": 60.0, "Transportation": 40.0,
    }
    paid = {row["member_id"]: row["paid"] for row in data["member_spending"]}
    assert paid == {a: 60.0, b: 40.0, c: 0.0}


def test_monthly_report(client, household):
    a, b, c = household
    _add(client, a, 30.0, [a, b, c], date="2024-03-05")
    _add(client, b, 300.0, [a, b, c], date="2024-04-05")
    res = client.get("/api/settlements/report?month=3&year=2024")
    assert res.status_code == 200
    data = res.json()
    assert data["report"]["total_expenses"] == 30.0
    assert data["debtor_count"] == 2
    assert data["creditor_count"] == 1
    assert len(data["transfers"]) == 2
    assert client.get("/api/settlements/report?month=3").status_code == 400

"""Reduce a roster and an expense list into per-member net balances."""
from ledger.log_config import get_logger
from ledger.schemas import Balance, BalanceReport, Expense, Member, MemberStatus

logger = get_logger(__name__)


def accepted_members(members: list[Member]) -> list[Member]:
    return [m for m in members if m.status == MemberStatus.ACCEPTED]


def compute_balances(members: list[Member], expenses: list[Expense]) -> BalanceReport:
    """
    Net position of every accepted member across ``expenses``.

    Each expense is split evenly across its distinct ``split_with`` ids. The payer is
    owed the amount less one share, whether or not they are in the split; every
    other participant with a balance entry owes one share. Expenses whose payer is
    not an accepted member only count toward ``total_expenses``.

    Balances only net to zero when every payer is also a participant and every
    participant is accepted.
    """
    roster = accepted_members(members)
    total = sum(e.amount for e in expenses)
    if not roster:
        return BalanceReport(balances=[], total_expenses=total, expense_per_person=0.0)

    balances = {m.id: Balance(member_id=m.id, name=m.name) for m in roster}

    for e in expenses:
        participants = list(dict.fromkeys(e.split_with))
        if not participants:
            logger.warning("expense_without_participants", expense_id=e.id, amount=e.amount)
            continue
        payer = balances.get(e.paid_by)
        if payer is None:
            logger.warning("expense_payer_not_accepted", expense_id=e.id, paid_by=e.paid_by)
            continue

        share = e.amount / len(participants)
        payer.owed += e.amount - share
        for uid in participants:
            if uid == e.paid_by:
                continue
            debtor = balances.get(uid)
            if debtor is not None:
                debtor.owes += share

    for b in balances.values():
        b.net_balance = b.owed - b.owes

    report = BalanceReport(
        balances=list(balances.values()),
        total_expenses=total,
        expense_per_person=total / len(roster),
    )
    logger.debug(
        "balances_computed",
        members=len(roster),
        expenses=len(expenses),
        total_expenses=round(total, 2),
    )
    return report

"""Greedy debt simplification: who should pay whom to settle every balance."""
from ledger.errors import ReconciliationError
from ledger.log_config import get_logger
from ledger.schemas import Balance, Transfer

logger = get_logger(__name__)

# Anything smaller than a cent is rounding noise.
TOLERANCE = 0.01


def residual(balances: list[Balance]) -> float:
    return sum(b.net_balance for b in balances)


def is_balanced(balances: list[Balance]) -> bool:
    return abs(residual(balances)) < TOLERANCE


def split_balances(balances: list[Balance]) -> tuple[list[Balance], list[Balance]]:
    """Debtors most negative first, creditors most positive first; ties keep input order."""
    debtors = sorted((b for b in balances if b.net_balance <= -TOLERANCE), key=lambda b: b.net_balance)
    creditors = sorted((b for b in balances if b.net_balance >= TOLERANCE), key=lambda b: -b.net_balance)
    return debtors, creditors


def plan_settlement(balances: list[Balance], strict: bool = False) -> list[Transfer]:
    """
    Transfers that drive every balance to zero.

    Largest debtor is matched against largest creditor until one side runs out.
    This is a heuristic: it keeps the transfer count at or below
    debtors + creditors - 1 but is not guaranteed to find the minimum.

    If the balances do not net to zero the unmatched remainder is dropped and
    logged, or ``ReconciliationError`` is raised when ``strict`` is set.
    """
    leftover = residual(balances)
    if abs(leftover) >= TOLERANCE:
        if strict:
            raise ReconciliationError(leftover)
        logger.warning("settlement_unbalanced", residual=round(leftover, 2))

    # Working copies: [member_id, name, remaining]
    owing, owed = split_balances(balances)
    debtors = [[b.member_id, b.name, b.net_balance] for b in owing]
    creditors = [[b.member_id, b.name, b.net_balance] for b in owed]

    out: list[Transfer] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        transfer = min(abs(debtor[2]), creditor[2])
        if transfer > TOLERANCE:
            out.append(Transfer(
                from_member=debtor[0],
                from_name=debtor[1],
                to_member=creditor[0],
                to_name=creditor[1],
                amount=round(transfer, 2),
            ))
        debtor[2] += transfer
        creditor[2] -= transfer
        if abs(debtor[2]) < TOLERANCE:
            i += 1
        if creditor[2] < TOLERANCE:
            j += 1

    logger.debug(
        "settlement_planned",
        debtors=len(debtors),
        creditors=len(creditors),
        transfers=len(out),
    )
    return out

"""Domain errors."""


class LedgerError(Exception):
    """Base class for ledger errors."""


class ReconciliationError(LedgerError):
    """Balances handed to the settlement planner do not net to zero."""

    def __init__(self, residual: float):
        self.residual = residual
        super().__init__(f"Balances do not net to zero (residual {residual:.2f})")

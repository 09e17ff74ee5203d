"""
Transaction-related exceptions.
"""

from typing import Optional


class TransactionError(Exception):
    """Base exception for unit-of-work failures."""

    pass


class TransientTransactionError(TransactionError):
    """Raised when the transaction context was lost and the work may be redone."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class TransactionTimeoutError(TransactionError):
    """Raised when a transaction exceeds its wait or execution budget."""

    def __init__(self, phase: str, budget_seconds: float):
        self.phase = phase
        self.budget_seconds = budget_seconds
        super().__init__(
            f"Transaction {phase} budget of {budget_seconds:g}s exceeded"
        )

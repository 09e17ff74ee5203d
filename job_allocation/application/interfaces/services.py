"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

from job_allocation.application.interfaces.repositories import TransactionContext

T = TypeVar("T")


class UnitOfWorkInterface(ABC):
    """Runs an operation inside one database transaction.

    Implementations commit when the operation returns, roll back when it raises,
    enforce the wait and execution budgets, and report lost transaction context
    as TransientTransactionError.
    """

    @abstractmethod
    async def run(self, operation: Callable[[TransactionContext], Awaitable[T]]) -> T:
        """Execute the operation atomically and return its result."""
        pass

"""
Retry handling for allocation transactions.
"""

from typing import Awaitable, Callable, Optional, TypeVar

from job_allocation.application.interfaces.repositories import TransactionContext
from job_allocation.application.interfaces.services import UnitOfWorkInterface
from job_allocation.config.logging import get_logger
from job_allocation.domain.exceptions.transaction_error import TransientTransactionError
from job_allocation.infrastructure.monitoring.metrics import record_retry_attempt

logger = get_logger(__name__)

T = TypeVar("T")


class RetryHandler:
    """Re-runs an operation when its transaction context was lost.

    Only TransientTransactionError is retried. Business errors, timeouts and
    anything else propagate on the first failure.
    """

    def __init__(self, max_retries: int = 1):
        if max_retries not in (0, 1):
            raise ValueError("max_retries must be 0 or 1")
        self.max_retries = max_retries
        self.logger = logger

    async def execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_key: str = "default",
    ) -> T:
        """
        Execute operation, retrying once on a transient transaction failure.

        Args:
            operation: Async function to execute; each call must start from scratch
            operation_key: Name used in logs and metrics

        Returns:
            Result of the operation

        Raises:
            TransientTransactionError: If the retry fails the same way
            Exception: Any non-transient error, unchanged
        """
        attempt = 0
        while True:
            try:
                return await operation()
            except TransientTransactionError as e:
                if attempt >= self.max_retries:
                    self.logger.error(
                        "Operation failed after retry",
                        operation_key=operation_key,
                        total_attempts=attempt + 1,
                        final_error=str(e),
                    )
                    raise

                attempt += 1
                record_retry_attempt(operation_key)
                self.logger.warning(
                    "Transaction context lost, retrying",
                    operation_key=operation_key,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e),
                )


class RetryingExecutor:
    """Runs unit-of-work operations with the transient-failure retry policy."""

    def __init__(
        self,
        unit_of_work: UnitOfWorkInterface,
        retry_handler: Optional[RetryHandler] = None,
    ):
        self.unit_of_work = unit_of_work
        self.retry_handler = retry_handler or RetryHandler()

    async def run(
        self,
        operation: Callable[[TransactionContext], Awaitable[T]],
        operation_key: str = "default",
    ) -> T:
        """Run the operation in a fresh transaction per attempt."""
        return await self.retry_handler.execute_with_retry(
            lambda: self.unit_of_work.run(operation), operation_key=operation_key
        )

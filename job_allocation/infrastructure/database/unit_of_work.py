"""
Unit of work for running allocation operations in a single database transaction.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, DisconnectionError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from job_allocation.application.interfaces.repositories import TransactionContext
from job_allocation.application.interfaces.services import UnitOfWorkInterface
from job_allocation.config.logging import get_logger
from job_allocation.domain.exceptions.transaction_error import (
    TransactionTimeoutError,
    TransientTransactionError,
)
from job_allocation.infrastructure.database.repositories.assignment_repository import (
    AssignmentRepository,
)
from job_allocation.infrastructure.database.repositories.consultant_repository import (
    ConsultantRepository,
)
from job_allocation.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from job_allocation.infrastructure.monitoring.metrics import record_transaction_timeout

logger = get_logger(__name__)

T = TypeVar("T")

# Serialization failure and deadlock
TRANSIENT_SQLSTATES = frozenset({"40001", "40P01"})


def _sqlstate(error: Optional[BaseException]) -> Optional[str]:
    """SQLSTATE carried by a DBAPI error or the driver error it wraps."""
    for candidate in (error, getattr(error, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return code
    return None


def is_transient_error(error: BaseException) -> bool:
    """Check if a driver error means the transaction context was lost."""
    if isinstance(error, DisconnectionError):
        return True

    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        return _sqlstate(error.orig) in TRANSIENT_SQLSTATES

    return False


class SqlAlchemyUnitOfWork(UnitOfWorkInterface):
    """Runs an operation against repositories bound to one AsyncSession."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_wait_seconds: float = 10.0,
        timeout_seconds: float = 30.0,
    ):
        self.session_factory = session_factory
        self.max_wait_seconds = max_wait_seconds
        self.timeout_seconds = timeout_seconds

    async def run(self, operation: Callable[[TransactionContext], Awaitable[T]]) -> T:
        """
        Execute an operation within a transaction.

        Args:
            operation: Async function receiving the transaction's repositories

        Returns:
            Result of the operation

        Raises:
            TransactionTimeoutError: If the wait or execution budget is exceeded
            TransientTransactionError: If the driver lost the transaction context
            Exception: Any other error raised by the operation, unchanged
        """
        async with self.session_factory() as session:
            await self._begin(session)

            context = TransactionContext(
                jobs=JobRepository(session),
                consultants=ConsultantRepository(session),
                assignments=AssignmentRepository(session),
            )

            try:
                result = await asyncio.wait_for(
                    self._execute(session, operation, context),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                await self._rollback(session)
                record_transaction_timeout("execute")
                logger.error(
                    "Transaction exceeded execution budget",
                    timeout_seconds=self.timeout_seconds,
                )
                raise TransactionTimeoutError("execute", self.timeout_seconds) from e
            except SQLAlchemyError as e:
                await self._rollback(session)
                if is_transient_error(e):
                    logger.warning(
                        "Transaction context lost", error=str(e), error_type=type(e).__name__
                    )
                    raise TransientTransactionError(str(e), cause=e) from e
                logger.error("Transaction rolled back due to error", error=str(e))
                raise
            except Exception as e:
                await self._rollback(session)
                logger.info(
                    "Transaction rolled back", error=str(e), error_type=type(e).__name__
                )
                raise

            logger.debug("Transaction committed successfully")
            return result

    async def _begin(self, session: AsyncSession) -> None:
        """Acquire a connection and begin, bounded by the wait budget."""
        try:
            await asyncio.wait_for(session.connection(), timeout=self.max_wait_seconds)
        except asyncio.TimeoutError as e:
            record_transaction_timeout("wait")
            logger.error(
                "Transaction could not start within wait budget",
                max_wait_seconds=self.max_wait_seconds,
            )
            raise TransactionTimeoutError("wait", self.max_wait_seconds) from e
        except SQLAlchemyError as e:
            if is_transient_error(e):
                raise TransientTransactionError(str(e), cause=e) from e
            raise

    async def _execute(
        self,
        session: AsyncSession,
        operation: Callable[[TransactionContext], Awaitable[T]],
        context: TransactionContext,
    ) -> T:
        result = await operation(context)
        await session.commit()
        return result

    async def _rollback(self, session: AsyncSession) -> None:
        """Roll back, tolerating a connection that is already gone."""
        try:
            await session.rollback()
        except SQLAlchemyError as e:
            logger.warning("Rollback failed", error=str(e))

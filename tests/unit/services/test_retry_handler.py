"""
Unit tests for RetryHandler and RetryingExecutor.
"""

from unittest.mock import AsyncMock

import pytest

from job_allocation.application.interfaces.services import UnitOfWorkInterface
from job_allocation.application.services.retry_handler import (
    RetryHandler,
    RetryingExecutor,
)
from job_allocation.domain.exceptions.allocation_error import JobNotFoundError
from job_allocation.domain.exceptions.transaction_error import (
    TransactionTimeoutError,
    TransientTransactionError,
)


class TestRetryHandler:
    """Test cases for RetryHandler."""

    @pytest.mark.parametrize("max_retries", [-1, 2])
    def test_rejects_unsupported_retry_counts(self, max_retries):
        with pytest.raises(ValueError):
            RetryHandler(max_retries=max_retries)

    @pytest.mark.asyncio
    async def test_returns_result_without_retry(self):
        operation = AsyncMock(return_value="done")

        result = await RetryHandler().execute_with_retry(operation, "allocate")

        assert result == "done"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_once_on_transient_error(self):
        operation = AsyncMock(
            side_effect=[TransientTransactionError("connection reset"), "done"]
        )

        result = await RetryHandler().execute_with_retry(operation, "allocate")

        assert result == "done"
        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_second_transient_error_propagates(self):
        operation = AsyncMock(
            side_effect=[
                TransientTransactionError("connection reset"),
                TransientTransactionError("connection reset again"),
            ]
        )

        with pytest.raises(TransientTransactionError, match="again"):
            await RetryHandler().execute_with_retry(operation, "allocate")

        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_no_retry_when_disabled(self):
        operation = AsyncMock(side_effect=TransientTransactionError("lost"))

        with pytest.raises(TransientTransactionError):
            await RetryHandler(max_retries=0).execute_with_retry(operation)

        assert operation.await_count == 1

    @pytest.mark.parametrize(
        "error",
        [
            JobNotFoundError("3f1b1a52-5f43-4c53-9d0c-6b1b6c1a5e01"),
            TransactionTimeoutError("execute", 30),
            RuntimeError("boom"),
        ],
    )
    @pytest.mark.asyncio
    async def test_non_transient_errors_are_not_retried(self, error):
        operation = AsyncMock(side_effect=error)

        with pytest.raises(type(error)):
            await RetryHandler().execute_with_retry(operation)

        assert operation.await_count == 1


class TestRetryingExecutor:
    """Test cases for RetryingExecutor."""

    @pytest.mark.asyncio
    async def test_each_attempt_runs_a_fresh_unit_of_work(self):
        unit_of_work = AsyncMock(spec=UnitOfWorkInterface)
        unit_of_work.run.side_effect = [TransientTransactionError("lost"), 42]

        async def operation(context):
            return 42

        executor = RetryingExecutor(unit_of_work)
        result = await executor.run(operation, operation_key="allocate")

        assert result == 42
        assert unit_of_work.run.await_count == 2
        for call in unit_of_work.run.await_args_list:
            assert call.args[0] is operation

"""Unassign job use case."""

from dataclasses import dataclass, field
from typing import Iterable, List
from uuid import UUID

from job_allocation.application.interfaces.repositories import TransactionContext
from job_allocation.application.services.retry_handler import RetryingExecutor
from job_allocation.config.logging import get_logger
from job_allocation.domain.exceptions.allocation_error import JobNotFoundError
from job_allocation.infrastructure.monitoring.metrics import (
    record_unassignment,
    track_duration,
)

logger = get_logger(__name__)

UNASSIGNED = "unassigned"
NOT_FOUND = "not_found"


@dataclass
class UnassignResult:
    """Result of unassigning one job."""

    job_id: UUID
    released_consultant_ids: List[UUID] = field(default_factory=list)

    @property
    def was_assigned(self) -> bool:
        """Check if any assignment was actually closed."""
        return bool(self.released_consultant_ids)


@dataclass
class UnassignOutcome:
    """Per-job outcome of a bulk unassignment."""

    job_id: UUID
    outcome: str
    released_consultant_ids: List[UUID] = field(default_factory=list)


class UnassignJobUseCase:
    """Use case for removing every active assignment from jobs."""

    def __init__(self, executor: RetryingExecutor):
        self.executor = executor

    @track_duration("unassign")
    async def execute(self, job_id: UUID) -> UnassignResult:
        """
        Unassign a job atomically.

        Calling it on a job without assignments only clears the job's
        allocation fields again.

        Raises:
            JobNotFoundError: If the job does not exist
        """
        result = await self.executor.run(
            lambda context: self._unassign(context, job_id),
            operation_key="unassign",
        )

        record_unassignment(UNASSIGNED if result.was_assigned else "noop")
        logger.info(
            "Job unassigned",
            job_id=str(job_id),
            released_consultant_ids=[str(c) for c in result.released_consultant_ids],
        )
        return result

    async def execute_many(self, job_ids: Iterable[UUID]) -> List[UnassignOutcome]:
        """
        Unassign several jobs, one transaction per job.

        Unknown jobs are reported as ``not_found``; any other error stops the
        batch and propagates, leaving already processed jobs committed.
        """
        outcomes = []

        for job_id in dict.fromkeys(job_ids):
            try:
                result = await self.execute(job_id)
            except JobNotFoundError:
                record_unassignment(NOT_FOUND)
                logger.warning("Bulk unassign skipped unknown job", job_id=str(job_id))
                outcomes.append(UnassignOutcome(job_id=job_id, outcome=NOT_FOUND))
                continue

            outcomes.append(
                UnassignOutcome(
                    job_id=job_id,
                    outcome=UNASSIGNED,
                    released_consultant_ids=result.released_consultant_ids,
                )
            )

        logger.info(
            "Bulk unassign completed",
            total=len(outcomes),
            not_found=sum(1 for o in outcomes if o.outcome == NOT_FOUND),
        )
        return outcomes

    async def _unassign(self, context: TransactionContext, job_id: UUID) -> UnassignResult:
        job = await context.jobs.get_by_id(job_id, for_update=True)
        if not job:
            raise JobNotFoundError(job_id)

        released = []
        for assignment in await context.assignments.find_active_by_job(job_id):
            # Pipeline stage is left untouched on unassignment
            assignment.close(close_pipeline=False)
            await context.assignments.update(assignment)
            await context.consultants.decrement_current_jobs(assignment.consultant_id)
            released.append(assignment.consultant_id)

        job.clear_assignment()
        await context.jobs.update_allocation(job)

        return UnassignResult(job_id=job_id, released_consultant_ids=released)

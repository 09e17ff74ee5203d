"""Allocate job use case."""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from job_allocation.application.interfaces.repositories import TransactionContext
from job_allocation.application.services.assignment_notifier import AssignmentNotifier
from job_allocation.application.services.retry_handler import RetryingExecutor
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.entities.job import Job
from job_allocation.domain.events import AssignmentChanged, JobAssigned, JobReassignedAway
from job_allocation.domain.exceptions.allocation_error import (
    ConsultantNotFoundError,
    JobNotFoundError,
    ReassignmentReasonRequiredError,
)
from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.pipeline_state import PipelineState
from job_allocation.infrastructure.monitoring.metrics import (
    record_allocation,
    track_duration,
)

logger = get_logger(__name__)


@dataclass
class AllocateJobRequest:
    """Request for assigning a job to a consultant."""

    job_id: UUID
    consultant_id: UUID
    assigned_by: str
    assigned_by_name: Optional[str] = None
    reason: Optional[str] = None
    source: Optional[AssignmentSource] = None


@dataclass
class AllocationResult:
    """Result of an allocation."""

    assignment: ConsultantJobAssignment
    job: Job
    target_consultant: Consultant
    previous_consultant: Optional[Consultant] = None
    is_reassignment: bool = False
    is_same_consultant: bool = False
    events: List[AssignmentChanged] = field(default_factory=list)

    @property
    def kind(self) -> str:
        """Short label of what the allocation did."""
        if self.is_same_consultant:
            return "confirmation"
        if self.is_reassignment:
            return "reassignment"
        return "assignment"


class AllocateJobUseCase:
    """Use case for assigning, reassigning or confirming a job's consultant."""

    def __init__(
        self,
        executor: RetryingExecutor,
        notifier: Optional[AssignmentNotifier] = None,
    ):
        self.executor = executor
        self.notifier = notifier

    @track_duration("allocate")
    async def execute(self, request: AllocateJobRequest) -> AllocationResult:
        """
        Allocate a job atomically, then notify the consultants involved.

        Args:
            request: Job, target consultant, acting user, reason and source

        Returns:
            AllocationResult of the committed transaction

        Raises:
            JobNotFoundError: If the job does not exist
            ConsultantNotFoundError: If the target consultant does not exist
            ReassignmentReasonRequiredError: If the job changes owner without a reason
            TransactionError: If the transaction timed out or was lost twice
        """
        logger.info(
            "Allocating job",
            job_id=str(request.job_id),
            consultant_id=str(request.consultant_id),
            assigned_by=request.assigned_by,
            source=request.source.value if request.source else None,
        )

        try:
            result = await self.executor.run(
                lambda context: self._allocate(context, request),
                operation_key="allocate",
            )
        except Exception as e:
            record_allocation("unknown", type(e).__name__)
            raise

        record_allocation(result.kind, "success")
        logger.info(
            "Job allocated",
            job_id=str(request.job_id),
            consultant_id=str(request.consultant_id),
            previous_consultant_id=str(result.previous_consultant.id)
            if result.previous_consultant
            else None,
            is_reassignment=result.is_reassignment,
            is_same_consultant=result.is_same_consultant,
        )

        if self.notifier and result.events:
            await self.notifier.publish(result.events)

        return result

    async def _allocate(
        self, context: TransactionContext, request: AllocateJobRequest
    ) -> AllocationResult:
        """Transaction body; runs from scratch on every attempt."""
        job = await context.jobs.get_by_id(request.job_id, for_update=True)
        if not job:
            raise JobNotFoundError(request.job_id)

        target = await context.consultants.get_by_id(request.consultant_id)
        if not target:
            raise ConsultantNotFoundError(request.consultant_id)

        previous_assignment = await context.assignments.find_active(job.id)
        if previous_assignment:
            previous_consultant_id = previous_assignment.consultant_id
        else:
            previous_consultant_id = job.assigned_consultant_id
            if previous_consultant_id:
                logger.warning(
                    "Job points at a consultant without an active assignment",
                    job_id=str(job.id),
                    assigned_consultant_id=str(previous_consultant_id),
                )

        source = request.source or AssignmentSource.default()
        region_id = target.region_id or job.region_id

        if previous_assignment and previous_consultant_id == target.id:
            if job.assigned_consultant_id != target.id:
                logger.warning(
                    "Restoring job pointer to the active assignment",
                    job_id=str(job.id),
                    assigned_consultant_id=str(job.assigned_consultant_id),
                    consultant_id=str(target.id),
                )
            job.assign_to(target.id, region_id, source)
            await context.jobs.update_allocation(job)
            return AllocationResult(
                assignment=previous_assignment,
                job=job,
                target_consultant=target,
                previous_consultant=target,
                is_same_consultant=True,
            )

        is_reassignment = (
            previous_consultant_id is not None and previous_consultant_id != target.id
        )
        reason = (request.reason or "").strip() or None
        if is_reassignment and not reason:
            raise ReassignmentReasonRequiredError(job.id, previous_consultant_id)

        pipeline = PipelineState.initial()
        if is_reassignment and previous_assignment:
            pipeline = previous_assignment.pipeline

        for active in await context.assignments.find_active_by_job(job.id):
            active.close()
            await context.assignments.update(active)

        assignment = await context.assignments.create(
            ConsultantJobAssignment.open(
                job_id=job.id,
                consultant_id=target.id,
                assigned_by=request.assigned_by,
                source=source,
                pipeline=pipeline,
            )
        )

        job.assign_to(target.id, region_id, source)
        await context.jobs.update_allocation(job)

        previous_consultant = None
        if is_reassignment:
            previous_consultant = await context.consultants.get_by_id(
                previous_consultant_id
            )
            await context.consultants.decrement_current_jobs(previous_consultant_id)
        await context.consultants.increment_current_jobs(target.id)

        events: List[AssignmentChanged] = [
            JobAssigned(
                job_id=job.id,
                job_title=job.title,
                consultant_id=target.id,
                changed_by=request.assigned_by_name,
                is_reassignment=is_reassignment,
                previous_consultant_id=previous_consultant_id if is_reassignment else None,
                previous_consultant_name=previous_consultant.full_name
                if previous_consultant
                else None,
                reason=reason,
            )
        ]
        if previous_consultant:
            events.append(
                JobReassignedAway(
                    job_id=job.id,
                    job_title=job.title,
                    consultant_id=previous_consultant.id,
                    new_consultant_id=target.id,
                    new_consultant_name=target.full_name,
                    changed_by=request.assigned_by_name,
                    reason=reason,
                )
            )

        return AllocationResult(
            assignment=assignment,
            job=job,
            target_consultant=target,
            previous_consultant=previous_consultant,
            is_reassignment=is_reassignment,
            events=events,
        )

"""Update pipeline use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from job_allocation.application.interfaces.repositories import TransactionContext
from job_allocation.application.services.retry_handler import RetryingExecutor
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.exceptions.allocation_error import AssignmentNotFoundError
from job_allocation.domain.exceptions.validation_error import (
    OutOfRangeError,
    RequiredFieldError,
)
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage

logger = get_logger(__name__)


@dataclass
class UpdatePipelineRequest:
    """Request for moving a consultant's pipeline on a job."""

    consultant_id: UUID
    job_id: UUID
    stage: PipelineStage
    progress: Optional[int] = None
    note: Optional[str] = None
    updated_by: Optional[str] = None


class UpdatePipelineUseCase:
    """Use case for updating the pipeline of an ACTIVE assignment."""

    def __init__(self, executor: RetryingExecutor):
        self.executor = executor

    async def execute(self, request: UpdatePipelineRequest) -> ConsultantJobAssignment:
        """
        Update stage, progress and note of the consultant's active assignment.

        Omitted progress and note keep their current values.

        Raises:
            ValidationError: If the stage is missing or progress is outside 0..100
            AssignmentNotFoundError: If the consultant has no active assignment
                on the job
        """
        self._validate(request)

        assignment = await self.executor.run(
            lambda context: self._update(context, request),
            operation_key="update_pipeline",
        )

        logger.info(
            "Pipeline updated",
            job_id=str(request.job_id),
            consultant_id=str(request.consultant_id),
            stage=PipelineStage(assignment.pipeline_stage).value,
            progress=assignment.pipeline_progress,
        )
        return assignment

    def _validate(self, request: UpdatePipelineRequest) -> None:
        if not request.stage:
            raise RequiredFieldError("stage")
        if request.progress is not None and not 0 <= request.progress <= 100:
            raise OutOfRangeError("progress", 0, 100)

    async def _update(
        self, context: TransactionContext, request: UpdatePipelineRequest
    ) -> ConsultantJobAssignment:
        assignment = await context.assignments.find_active(
            request.job_id, request.consultant_id
        )
        if not assignment:
            raise AssignmentNotFoundError(request.job_id, request.consultant_id)

        assignment.update_pipeline(
            stage=PipelineStage(request.stage),
            updated_by=request.updated_by or str(request.consultant_id),
            progress=request.progress,
            note=request.note,
        )
        return await context.assignments.update(assignment)

"""Auto-assign job use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from job_allocation.application.services.selection_service import SelectionService
from job_allocation.application.use_cases.allocate_job import (
    AllocateJobRequest,
    AllocateJobUseCase,
    AllocationResult,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.value_objects.assignment_source import AssignmentSource

logger = get_logger(__name__)

SYSTEM_USER = "system"
SYSTEM_USER_NAME = "Auto-assignment"


@dataclass
class AutoAssignJobRequest:
    """Request for assigning a job to the best consultant of its region."""

    job_id: UUID
    assigned_by: Optional[str] = None
    assigned_by_name: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class AutoAssignResult:
    """Result of auto-assignment."""

    consultant_id: UUID
    allocation: AllocationResult


class AutoAssignJobUseCase:
    """Use case for rule-based assignment to the least-loaded consultant."""

    def __init__(
        self,
        selection_service: SelectionService,
        allocate_job: AllocateJobUseCase,
    ):
        self.selection_service = selection_service
        self.allocate_job = allocate_job

    async def execute(self, request: AutoAssignJobRequest) -> AutoAssignResult:
        """
        Pick a consultant and allocate the job with source AUTO_RULES.

        Raises:
            JobNotFoundError: If the job does not exist
            JobRegionMissingError: If neither the job nor its company has a region
            NoEligibleConsultantError: If no active consultant serves the region
            ReassignmentReasonRequiredError: If the job already has another
                owner and no reason was given
        """
        logger.info("Auto-assign started", job_id=str(request.job_id))

        candidate = await self.selection_service.select_auto_assignee(request.job_id)

        logger.info(
            "Auto-assign consultant selected",
            job_id=str(request.job_id),
            region_id=str(candidate.region_id),
            consultant_id=str(candidate.consultant.id),
            current_jobs=candidate.consultant.current_jobs,
        )

        allocation = await self.allocate_job.execute(
            AllocateJobRequest(
                job_id=request.job_id,
                consultant_id=candidate.consultant.id,
                assigned_by=request.assigned_by or SYSTEM_USER,
                assigned_by_name=request.assigned_by_name or SYSTEM_USER_NAME,
                reason=request.reason,
                source=AssignmentSource.AUTO_RULES,
            )
        )

        return AutoAssignResult(
            consultant_id=candidate.consultant.id, allocation=allocation
        )

"""Job allocation API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from job_allocation.api.dependencies import (
    ActingUserDep,
    AllocateJobUseCaseDep,
    AutoAssignJobUseCaseDep,
    SelectionServiceDep,
    UnassignJobUseCaseDep,
    UpdatePipelineUseCaseDep,
)
from job_allocation.api.schemas.allocation import (
    AllocateJobBody,
    AllocationResponse,
    AllocationStatsResponse,
    AssignConsultantBody,
    AssignmentInfoJob,
    AssignmentInfoResponse,
    AssignmentResponse,
    AutoAssignBody,
    AutoAssignResponse,
    BulkUnassignBody,
    BulkUnassignResponse,
    ConsultantListResponse,
    ConsultantResponse,
    ConsultantSummary,
    JobAllocationItem,
    JobAllocationListResponse,
    PipelineResponse,
    UnassignOutcomeResponse,
    UnassignResponse,
    UpdatePipelineBody,
)
from job_allocation.application.interfaces.repositories import (
    AssignmentFacet,
    ConsultantSearchCriteria,
    JobAllocationFilters,
)
from job_allocation.application.use_cases.allocate_job import (
    AllocateJobRequest,
    AllocationResult,
)
from job_allocation.application.use_cases.auto_assign_job import AutoAssignJobRequest
from job_allocation.application.use_cases.update_pipeline import UpdatePipelineRequest
from job_allocation.config.logging import get_logger
from job_allocation.config.settings import settings
from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)
router = APIRouter(prefix="/job-allocation", tags=["job-allocation"])


def _facet_value(value: Optional[str]) -> Optional[str]:
    """Drop the 'ALL' and empty facet values sent by the allocation screens."""
    if value is None:
        return None
    value = value.strip()
    if not value or value.upper() == AssignmentFacet.ALL:
        return None
    return value


def _uuid_param(value: Optional[str], name: str) -> Optional[UUID]:
    value = _facet_value(value)
    if value is None:
        return None
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"{name} must be a valid UUID") from None


def _uuid_list_param(value: Optional[str], name: str) -> Optional[List[UUID]]:
    value = _facet_value(value)
    if value is None:
        return None
    ids = [_uuid_param(part, name) for part in value.split(",")]
    return [i for i in ids if i] or None


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return value.value if hasattr(value, "value") else value


def _assignment_response(assignment: ConsultantJobAssignment) -> AssignmentResponse:
    return AssignmentResponse(
        id=assignment.id,
        job_id=assignment.job_id,
        consultant_id=assignment.consultant_id,
        status=_enum_value(assignment.status),
        assigned_by=assignment.assigned_by,
        assigned_at=assignment.assigned_at,
        assignment_source=_enum_value(assignment.assignment_source),
        pipeline_stage=_enum_value(assignment.pipeline_stage),
        pipeline_progress=assignment.pipeline_progress,
        pipeline_note=assignment.pipeline_note,
        pipeline_updated_at=assignment.pipeline_updated_at,
        pipeline_updated_by=assignment.pipeline_updated_by,
    )


def _allocation_fields(result: AllocationResult) -> dict:
    return dict(
        job_id=result.job.id,
        consultant_id=result.target_consultant.id,
        previous_consultant_id=result.previous_consultant.id
        if result.previous_consultant and not result.is_same_consultant
        else None,
        region_id=result.job.region_id,
        assignment_source=_enum_value(result.job.assignment_source),
        assignment_mode=_enum_value(result.job.assignment_mode),
        is_reassignment=result.is_reassignment,
        is_same_consultant=result.is_same_consultant,
        assignment=_assignment_response(result.assignment),
    )


def _allocation_message(result: AllocationResult) -> str:
    if result.is_same_consultant:
        return "Assignment confirmed"
    if result.is_reassignment:
        return "Job reassigned"
    return "Job assigned"


def _consultant_response(consultant: Consultant) -> ConsultantResponse:
    return ConsultantResponse(
        id=consultant.id,
        first_name=consultant.first_name,
        last_name=consultant.last_name,
        email=consultant.email,
        region_id=consultant.region_id,
        role=_enum_value(consultant.role),
        status=_enum_value(consultant.status),
        availability=consultant.effective_availability().value,
        current_jobs=consultant.current_jobs,
        max_jobs=consultant.max_jobs,
        industries=consultant.industries,
        languages=consultant.languages,
    )


async def _allocate(
    use_case, acting_user, job_id: UUID, consultant_id: UUID, reason, source
) -> AllocationResponse:
    result = await use_case.execute(
        AllocateJobRequest(
            job_id=job_id,
            consultant_id=consultant_id,
            assigned_by=acting_user.id,
            assigned_by_name=acting_user.name,
            reason=reason,
            source=source,
        )
    )
    return AllocationResponse(
        message=_allocation_message(result), **_allocation_fields(result)
    )


@router.post("/allocate", response_model=AllocationResponse)
async def allocate_job(
    body: AllocateJobBody,
    use_case: AllocateJobUseCaseDep,
    acting_user: ActingUserDep,
):
    """Assign, reassign or confirm the consultant of a job."""
    return await _allocate(
        use_case, acting_user, body.job_id, body.consultant_id, body.reason, body.source
    )


@router.post("/jobs/{job_id}/assign-consultant", response_model=AllocationResponse)
async def assign_consultant(
    job_id: UUID,
    body: AssignConsultantBody,
    use_case: AllocateJobUseCaseDep,
    acting_user: ActingUserDep,
):
    """Assign a consultant to the job in the path."""
    return await _allocate(
        use_case, acting_user, job_id, body.consultant_id, body.reason, body.source
    )


@router.post("/jobs/{job_id}/auto-assign", response_model=AutoAssignResponse)
async def auto_assign_job(
    job_id: UUID,
    use_case: AutoAssignJobUseCaseDep,
    acting_user: ActingUserDep,
    body: Optional[AutoAssignBody] = None,
):
    """Assign the job to the least-loaded consultant of its region."""
    result = await use_case.execute(
        AutoAssignJobRequest(
            job_id=job_id,
            assigned_by=acting_user.id,
            assigned_by_name=acting_user.name,
            reason=body.reason if body else None,
        )
    )
    return AutoAssignResponse(
        message=_allocation_message(result.allocation),
        **_allocation_fields(result.allocation),
    )


@router.post("/jobs/{job_id}/unassign", response_model=UnassignResponse)
async def unassign_job(
    job_id: UUID,
    use_case: UnassignJobUseCaseDep,
    acting_user: ActingUserDep,
):
    """Remove the consultant of a job."""
    result = await use_case.execute(job_id)
    logger.info("Job unassigned via API", job_id=str(job_id), user_id=acting_user.id)
    return UnassignResponse(
        message="Job unassigned",
        job_id=result.job_id,
        released_consultant_ids=result.released_consultant_ids,
    )


@router.delete("/{job_id}", response_model=UnassignResponse)
async def deallocate_job(
    job_id: UUID,
    use_case: UnassignJobUseCaseDep,
    acting_user: ActingUserDep,
):
    """Deallocate a job; same effect as unassign."""
    return await unassign_job(job_id, use_case, acting_user)


@router.post("/unassign", response_model=BulkUnassignResponse)
async def bulk_unassign(
    body: BulkUnassignBody,
    use_case: UnassignJobUseCaseDep,
    acting_user: ActingUserDep,
):
    """Unassign several jobs, one transaction each."""
    outcomes = await use_case.execute_many(body.job_ids)
    logger.info(
        "Bulk unassign via API", job_count=len(body.job_ids), user_id=acting_user.id
    )
    return BulkUnassignResponse(
        results=[
            UnassignOutcomeResponse(
                job_id=outcome.job_id,
                outcome=outcome.outcome,
                released_consultant_ids=outcome.released_consultant_ids,
            )
            for outcome in outcomes
        ]
    )


@router.get("/jobs", response_model=JobAllocationListResponse)
async def list_jobs_for_allocation(
    selection_service: SelectionServiceDep,
    region_id: Optional[str] = None,
    region_ids: Optional[str] = Query(None, description="Comma-separated region IDs"),
    company_id: Optional[str] = None,
    consultant_id: Optional[str] = None,
    search: Optional[str] = None,
    assignment_status: Optional[str] = None,
    limit: int = Query(settings.JOB_ALLOCATION_PAGE_SIZE, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """List open and on-hold jobs for allocation."""
    filters = JobAllocationFilters(
        region_id=_uuid_param(region_id, "region_id"),
        region_ids=_uuid_list_param(region_ids, "region_ids"),
        company_id=_uuid_param(company_id, "company_id"),
        consultant_id=_uuid_param(consultant_id, "consultant_id"),
        search=_facet_value(search),
        assignment_status=_facet_value(assignment_status) or AssignmentFacet.ALL,
        limit=limit,
        offset=offset,
    )
    page = await selection_service.find_jobs_for_allocation(filters)

    return JobAllocationListResponse(
        jobs=[JobAllocationItem.model_validate(job) for job in page.jobs],
        total=page.total,
        limit=limit,
        offset=offset,
        has_more=offset + len(page.jobs) < page.total,
    )


@router.get("/consultants", response_model=ConsultantListResponse)
async def list_consultants_for_assignment(
    selection_service: SelectionServiceDep,
    region_id: Optional[str] = None,
    role: Optional[str] = None,
    availability: Optional[str] = None,
    industry: Optional[str] = None,
    language: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(settings.CONSULTANT_PAGE_SIZE, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """List active consultants of a region, least loaded first."""
    criteria = ConsultantSearchCriteria(
        region_id=_uuid_param(region_id, "region_id"),
        role=_facet_value(role),
        availability=_facet_value(availability),
        industry=_facet_value(industry),
        language=_facet_value(language),
        search=_facet_value(search),
        limit=limit,
        offset=offset,
    )
    page = await selection_service.get_consultants_for_assignment(criteria)

    return ConsultantListResponse(
        consultants=[_consultant_response(c) for c in page.consultants],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
        has_more=page.has_more,
    )


@router.get("/stats", response_model=AllocationStatsResponse)
async def get_allocation_stats(selection_service: SelectionServiceDep):
    """Allocation counters among open and on-hold jobs."""
    stats = await selection_service.get_stats()
    return AllocationStatsResponse.model_validate(stats)


@router.get("/jobs/{job_id}/consultants", response_model=List[ConsultantSummary])
async def get_job_consultants(job_id: UUID, selection_service: SelectionServiceDep):
    """Consultants currently assigned to a job."""
    consultants = await selection_service.find_consultants_by_job(job_id)
    return [ConsultantSummary.model_validate(c) for c in consultants]


@router.get("/jobs/{job_id}/assignment-info", response_model=AssignmentInfoResponse)
async def get_assignment_info(job_id: UUID, selection_service: SelectionServiceDep):
    """Allocation state of a job and the consultants it could go to."""
    info = await selection_service.get_assignment_info(job_id)

    return AssignmentInfoResponse(
        job=AssignmentInfoJob(
            id=info.job.id,
            title=info.job.title,
            assigned_consultant_id=info.job.assigned_consultant_id,
            assignment_source=_enum_value(info.job.assignment_source),
            assignment_mode=_enum_value(info.job.assignment_mode),
            region_id=info.region_id,
        ),
        consultants=[ConsultantSummary.model_validate(c) for c in info.consultants],
        pipeline=PipelineResponse(
            consultant_id=info.pipeline.consultant_id,
            job_id=info.pipeline.job_id,
            stage=info.pipeline.stage.value,
            progress=info.pipeline.progress,
            note=info.pipeline.note,
            updated_at=info.pipeline.updated_at,
            updated_by=info.pipeline.updated_by,
        )
        if info.pipeline
        else None,
    )


@router.put(
    "/jobs/{job_id}/pipeline/{consultant_id}",
    response_model=AssignmentResponse,
    status_code=status.HTTP_200_OK,
)
async def update_pipeline(
    job_id: UUID,
    consultant_id: UUID,
    body: UpdatePipelineBody,
    use_case: UpdatePipelineUseCaseDep,
    acting_user: ActingUserDep,
):
    """Move the pipeline of a consultant's active assignment."""
    assignment = await use_case.execute(
        UpdatePipelineRequest(
            consultant_id=consultant_id,
            job_id=job_id,
            stage=body.stage,
            progress=body.progress,
            note=body.note,
            updated_by=acting_user.id,
        )
    )
    return _assignment_response(assignment)

"""
Job allocation API schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage

from .common import BaseResponse, PaginatedResponse


class AllocateJobBody(BaseModel):
    """Body of POST /job-allocation/allocate."""

    job_id: UUID
    consultant_id: UUID
    reason: Optional[str] = Field(None, max_length=1000)
    source: Optional[AssignmentSource] = None


class AssignConsultantBody(BaseModel):
    """Body of POST /job-allocation/jobs/{job_id}/assign-consultant."""

    consultant_id: UUID
    reason: Optional[str] = Field(None, max_length=1000)
    source: Optional[AssignmentSource] = None


class AutoAssignBody(BaseModel):
    """Body of POST /job-allocation/jobs/{job_id}/auto-assign."""

    reason: Optional[str] = Field(None, max_length=1000)


class BulkUnassignBody(BaseModel):
    """Body of POST /job-allocation/unassign."""

    job_ids: List[UUID] = Field(..., min_length=1, max_length=500)


class UpdatePipelineBody(BaseModel):
    """Body of PUT /job-allocation/jobs/{job_id}/pipeline/{consultant_id}."""

    stage: PipelineStage
    progress: Optional[int] = Field(None, ge=0, le=100)
    note: Optional[str] = Field(None, max_length=2000)

    @field_validator("stage", mode="before")
    @classmethod
    def normalize_stage(cls, v):
        if isinstance(v, str):
            return v.strip().upper().replace("-", "_").replace(" ", "_")
        return v


class ConsultantSummary(BaseModel):
    """Consultant as shown in allocation screens."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: Optional[str] = None


class ConsultantResponse(ConsultantSummary):
    """Consultant row of the assignment picker."""

    region_id: Optional[UUID] = None
    role: str
    status: str
    availability: str
    current_jobs: int
    max_jobs: int
    industries: List[str] = []
    languages: List[str] = []


class AssignmentResponse(BaseModel):
    """Assignment history row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    consultant_id: UUID
    status: str
    assigned_by: str
    assigned_at: datetime
    assignment_source: str
    pipeline_stage: str
    pipeline_progress: int
    pipeline_note: Optional[str] = None
    pipeline_updated_at: Optional[datetime] = None
    pipeline_updated_by: Optional[str] = None


class AllocationResponse(BaseResponse):
    """Result of an allocation."""

    job_id: UUID
    consultant_id: UUID
    previous_consultant_id: Optional[UUID] = None
    region_id: Optional[UUID] = None
    assignment_source: Optional[str] = None
    assignment_mode: Optional[str] = None
    is_reassignment: bool
    is_same_consultant: bool
    assignment: AssignmentResponse


class AutoAssignResponse(AllocationResponse):
    """Result of an auto-assignment."""


class UnassignResponse(BaseResponse):
    """Result of unassigning one job."""

    job_id: UUID
    released_consultant_ids: List[UUID] = []


class UnassignOutcomeResponse(BaseModel):
    """Per-job outcome of a bulk unassignment."""

    job_id: UUID
    outcome: str
    released_consultant_ids: List[UUID] = []


class BulkUnassignResponse(BaseResponse):
    """Result of a bulk unassignment."""

    results: List[UnassignOutcomeResponse]


class JobAllocationItem(BaseModel):
    """Job row of the allocation list."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    status: str
    job_code: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    company_id: Optional[UUID] = None
    company_name: Optional[str] = None
    region_id: Optional[UUID] = None
    region_name: Optional[str] = None
    assigned_consultant_id: Optional[UUID] = None
    assigned_consultant_name: Optional[str] = None
    assignment_source: Optional[str] = None
    assignment_mode: Optional[str] = None
    created_at: Optional[datetime] = None


class JobAllocationListResponse(PaginatedResponse):
    """Page of the allocation job list."""

    jobs: List[JobAllocationItem]


class ConsultantListResponse(PaginatedResponse):
    """Page of consultants for assignment."""

    consultants: List[ConsultantResponse]


class AllocationStatsResponse(BaseModel):
    """Allocation counters among open and on-hold jobs."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    unassigned: int
    assigned: int


class PipelineResponse(BaseModel):
    """Pipeline of an active assignment."""

    model_config = ConfigDict(from_attributes=True)

    consultant_id: UUID
    job_id: UUID
    stage: str
    progress: int
    note: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class AssignmentInfoJob(BaseModel):
    """Allocation fields of a job."""

    id: UUID
    title: str
    assigned_consultant_id: Optional[UUID] = None
    assignment_source: Optional[str] = None
    assignment_mode: Optional[str] = None
    region_id: Optional[UUID] = None


class AssignmentInfoResponse(BaseModel):
    """Job allocation state plus the consultants of its region."""

    job: AssignmentInfoJob
    consultants: List[ConsultantSummary]
    pipeline: Optional[PipelineResponse] = None

"""
Selection service: read-side queries that decide who gets a job.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from job_allocation.application.interfaces.repositories import (
    AllocationStats,
    AssignmentFacet,
    AssignmentRepositoryInterface,
    ConsultantRepositoryInterface,
    ConsultantSearchCriteria,
    JobAllocationFilters,
    JobAllocationView,
    JobRepositoryInterface,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.job import Job
from job_allocation.domain.exceptions.allocation_error import (
    JobNotFoundError,
    JobRegionMissingError,
    NoEligibleConsultantError,
)
from job_allocation.domain.exceptions.validation_error import RequiredFieldError
from job_allocation.domain.value_objects.consultant_role import normalize_enum_token
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage

logger = get_logger(__name__)

ALL_TOKEN = "ALL"


@dataclass
class JobPage:
    """Page of the allocation job list."""

    jobs: List[JobAllocationView]
    total: int


@dataclass
class ConsultantPage:
    """Page of consultants ranked for assignment."""

    consultants: List[Consultant]
    total: int
    has_more: bool
    offset: int
    limit: int


@dataclass
class PipelineView:
    """Pipeline of the ACTIVE assignment on a job."""

    consultant_id: UUID
    job_id: UUID
    stage: PipelineStage
    progress: int
    note: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


@dataclass
class AssignmentInfo:
    """Allocation state of a job plus the consultants it could go to."""

    job: Job
    region_id: Optional[UUID]
    consultants: List[Consultant] = field(default_factory=list)
    pipeline: Optional[PipelineView] = None


@dataclass
class AutoAssignmentCandidate:
    """Job, resolved region and the consultant auto-assignment picked."""

    job: Job
    region_id: UUID
    consultant: Consultant


class SelectionService:
    """Read-only queries behind the allocation screens and auto-assignment."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        consultant_repo: ConsultantRepositoryInterface,
        assignment_repo: AssignmentRepositoryInterface,
        job_page_size: int = 10,
        consultant_page_size: int = 25,
    ):
        self.job_repo = job_repo
        self.consultant_repo = consultant_repo
        self.assignment_repo = assignment_repo
        self.job_page_size = job_page_size
        self.consultant_page_size = consultant_page_size
        self.logger = logger

    async def find_jobs_for_allocation(
        self, filters: Optional[JobAllocationFilters] = None
    ) -> JobPage:
        """
        List open and on-hold jobs for the allocation screen.

        Args:
            filters: Region, company, consultant, search and facet filters

        Returns:
            JobPage with the requested slice, newest first, and the total count
        """
        filters = filters or JobAllocationFilters(limit=self.job_page_size)

        facet = normalize_enum_token(filters.assignment_status) or AssignmentFacet.ALL
        if facet not in AssignmentFacet.VALUES:
            facet = AssignmentFacet.ALL
        filters.assignment_status = facet

        self.logger.info(
            "Loading jobs for allocation",
            region_id=str(filters.region_id) if filters.region_id else None,
            company_id=str(filters.company_id) if filters.company_id else None,
            consultant_id=str(filters.consultant_id) if filters.consultant_id else None,
            assignment_status=facet,
            limit=filters.limit,
            offset=filters.offset,
        )

        jobs, total = await self.job_repo.find_for_allocation(filters)
        return JobPage(jobs=jobs, total=total)

    async def get_consultants_for_assignment(
        self, criteria: ConsultantSearchCriteria
    ) -> ConsultantPage:
        """
        List active consultants of a region, least loaded first.

        Raises:
            RequiredFieldError: If no region is given
        """
        if not criteria.region_id:
            raise RequiredFieldError("region_id")

        criteria.role = normalize_enum_token(criteria.role)
        availability = normalize_enum_token(criteria.availability)
        criteria.availability = None if availability == ALL_TOKEN else availability
        criteria.industry = (criteria.industry or "").strip() or None
        criteria.language = (criteria.language or "").strip() or None
        criteria.search = (criteria.search or "").strip() or None

        self.logger.info(
            "Loading consultants for assignment",
            region_id=str(criteria.region_id),
            role=criteria.role,
            availability=criteria.availability,
            industry=criteria.industry,
            language=criteria.language,
            limit=criteria.limit,
            offset=criteria.offset,
        )

        consultants, total = await self.consultant_repo.find_for_assignment(criteria)

        return ConsultantPage(
            consultants=consultants,
            total=total,
            has_more=criteria.offset + len(consultants) < total,
            offset=criteria.offset,
            limit=criteria.limit,
        )

    async def get_stats(self) -> AllocationStats:
        """Counts of open and on-hold jobs by assignment state."""
        return await self.job_repo.get_allocation_stats()

    async def find_consultants_by_job(self, job_id: UUID) -> List[Consultant]:
        """Consultants currently assigned to a job."""
        return await self.assignment_repo.find_consultants_by_job(job_id)

    async def resolve_region(self, job: Job) -> Optional[UUID]:
        """Job region, falling back to the company's region."""
        if job.region_id:
            return job.region_id
        if job.company_id:
            return await self.job_repo.get_company_region_id(job.company_id)
        return None

    async def select_auto_assignee(self, job_id: UUID) -> AutoAssignmentCandidate:
        """
        Pick the least-loaded active consultant in a job's region.

        Raises:
            JobNotFoundError: If the job does not exist
            JobRegionMissingError: If neither the job nor its company has a region
            NoEligibleConsultantError: If the region has no active consultant
        """
        job = await self._get_job(job_id)
        region_id = await self.resolve_region(job)

        self.logger.info(
            "Auto-assign region resolved",
            job_id=str(job_id),
            job_region_id=str(job.region_id) if job.region_id else None,
            resolved_region_id=str(region_id) if region_id else None,
        )
        if not region_id:
            raise JobRegionMissingError(job_id)

        consultants, _ = await self.consultant_repo.find_for_assignment(
            ConsultantSearchCriteria(region_id=region_id, limit=1)
        )
        if not consultants:
            raise NoEligibleConsultantError(job_id, region_id)

        return AutoAssignmentCandidate(
            job=job, region_id=region_id, consultant=consultants[0]
        )

    async def get_pipeline(
        self, job_id: UUID, consultant_id: Optional[UUID] = None
    ) -> Optional[PipelineView]:
        """Pipeline of the job's newest ACTIVE assignment, if any."""
        assignment = await self.assignment_repo.find_active(job_id, consultant_id)
        if not assignment:
            return None

        return PipelineView(
            consultant_id=assignment.consultant_id,
            job_id=assignment.job_id,
            stage=PipelineStage(assignment.pipeline_stage),
            progress=assignment.pipeline_progress,
            note=assignment.pipeline_note,
            updated_at=assignment.pipeline_updated_at,
            updated_by=assignment.pipeline_updated_by,
        )

    async def get_assignment_info(self, job_id: UUID) -> AssignmentInfo:
        """
        Allocation state of a job for the assignment dialog.

        Raises:
            JobNotFoundError: If the job does not exist
        """
        job = await self._get_job(job_id)
        region_id = await self.resolve_region(job)

        consultants = (
            await self.consultant_repo.find_active_by_region(region_id)
            if region_id
            else []
        )
        pipeline = await self.get_pipeline(job_id)

        self.logger.info(
            "Assignment info loaded",
            job_id=str(job_id),
            resolved_region_id=str(region_id) if region_id else None,
            consultants_count=len(consultants),
            has_pipeline=pipeline is not None,
        )

        return AssignmentInfo(
            job=job, region_id=region_id, consultants=consultants, pipeline=pipeline
        )

    async def _get_job(self, job_id: UUID) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)
        return job

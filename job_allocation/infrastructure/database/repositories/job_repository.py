"""Job repository implementation."""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from job_allocation.application.interfaces.repositories import (
    AllocationStats,
    AssignmentFacet,
    JobAllocationFilters,
    JobAllocationView,
    JobRepositoryInterface,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.job import Job
from job_allocation.domain.value_objects.assignment_mode import AssignmentMode
from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.job_status import JobStatus
from job_allocation.infrastructure.database.models.company import CompanyModel
from job_allocation.infrastructure.database.models.consultant import ConsultantModel
from job_allocation.infrastructure.database.models.job import JobModel
from job_allocation.infrastructure.database.models.region import RegionModel

logger = get_logger(__name__)

ALLOCATABLE_STATUSES = [status.value for status in JobStatus.allocatable()]


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID, for_update: bool = False) -> Optional[Job]:
        """Get job by ID."""
        stmt = select(JobModel).where(JobModel.id == job_id)
        if for_update:
            # Serializes concurrent allocate/unassign calls on the same job
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def update_allocation(self, job: Job) -> Job:
        """Persist the allocation fields of a job."""
        stmt = (
            update(JobModel)
            .where(JobModel.id == job.id)
            .values(
                region_id=job.region_id,
                assigned_consultant_id=job.assigned_consultant_id,
                assignment_source=_enum_value(job.assignment_source),
                assignment_mode=_enum_value(job.assignment_mode),
                updated_at=datetime.now(timezone.utc),
            )
        )

        await self.db.execute(stmt)
        await self.db.flush()

        logger.debug(
            "Job allocation fields updated",
            job_id=str(job.id),
            assigned_consultant_id=str(job.assigned_consultant_id)
            if job.assigned_consultant_id
            else None,
            region_id=str(job.region_id) if job.region_id else None,
        )
        return job

    async def get_company_region_id(self, company_id: UUID) -> Optional[UUID]:
        """Get the region of a company."""
        stmt = select(CompanyModel.region_id).where(CompanyModel.id == company_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_for_allocation(
        self, filters: JobAllocationFilters
    ) -> Tuple[List[JobAllocationView], int]:
        """Page of open/on-hold jobs matching the filters, plus total count."""
        conditions = self._allocation_conditions(filters)

        stmt = (
            select(
                JobModel,
                CompanyModel.name,
                CompanyModel.region_id,
                RegionModel.name,
                ConsultantModel.first_name,
                ConsultantModel.last_name,
            )
            .outerjoin(CompanyModel, JobModel.company_id == CompanyModel.id)
            .outerjoin(RegionModel, JobModel.region_id == RegionModel.id)
            .outerjoin(
                ConsultantModel, JobModel.assigned_consultant_id == ConsultantModel.id
            )
            .where(*conditions)
            .order_by(JobModel.created_at.desc(), JobModel.id)
            .limit(filters.limit)
            .offset(filters.offset)
        )
        count_stmt = (
            select(func.count(JobModel.id))
            .select_from(JobModel)
            .outerjoin(CompanyModel, JobModel.company_id == CompanyModel.id)
            .where(*conditions)
        )

        result = await self.db.execute(stmt)
        rows = result.all()
        total = (await self.db.execute(count_stmt)).scalar_one()

        views = [
            JobAllocationView(
                id=job.id,
                title=job.title,
                status=job.status,
                job_code=job.job_code,
                category=job.category,
                location=job.location,
                company_id=job.company_id,
                company_name=company_name,
                region_id=job.region_id or company_region_id,
                region_name=region_name,
                assigned_consultant_id=job.assigned_consultant_id,
                assigned_consultant_name=f"{first_name} {last_name}".strip()
                if first_name is not None
                else None,
                assignment_source=job.assignment_source,
                assignment_mode=job.assignment_mode,
                created_at=job.created_at,
            )
            for job, company_name, company_region_id, region_name, first_name, last_name in rows
        ]

        return views, total

    async def get_allocation_stats(self) -> AllocationStats:
        """Count open/on-hold jobs by assignment state."""
        stmt = select(
            func.count(JobModel.id),
            func.count(JobModel.assigned_consultant_id),
        ).where(JobModel.status.in_(ALLOCATABLE_STATUSES))

        total, assigned = (await self.db.execute(stmt)).one()

        return AllocationStats(
            total=total, unassigned=total - assigned, assigned=assigned
        )

    def _allocation_conditions(self, filters: JobAllocationFilters) -> list:
        """Build WHERE clauses for the allocation job list."""
        conditions = [JobModel.status.in_(ALLOCATABLE_STATUSES)]

        if filters.consultant_id:
            conditions.append(JobModel.assigned_consultant_id == filters.consultant_id)
        elif filters.assignment_status == AssignmentFacet.UNASSIGNED:
            conditions.append(JobModel.assigned_consultant_id.is_(None))
        elif filters.assignment_status == AssignmentFacet.ASSIGNED:
            conditions.append(JobModel.assigned_consultant_id.isnot(None))

        if filters.region_ids:
            conditions.append(JobModel.region_id.in_(filters.region_ids))
        elif filters.region_id:
            conditions.append(JobModel.region_id == filters.region_id)

        if filters.company_id:
            conditions.append(JobModel.company_id == filters.company_id)

        if filters.search and filters.search.strip():
            pattern = f"%{filters.search.strip()}%"
            conditions.append(
                or_(
                    JobModel.title.ilike(pattern),
                    JobModel.job_code.ilike(pattern),
                    CompanyModel.name.ilike(pattern),
                )
            )

        return conditions

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            title=model.title,
            job_code=model.job_code,
            company_id=model.company_id,
            status=JobStatus(model.status),
            region_id=model.region_id,
            assigned_consultant_id=model.assigned_consultant_id,
            assignment_source=AssignmentSource(model.assignment_source)
            if model.assignment_source
            else None,
            assignment_mode=AssignmentMode(model.assignment_mode)
            if model.assignment_mode
            else None,
            category=model.category,
            location=model.location,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def _enum_value(value) -> Optional[str]:
    """Plain string for an optional enum column."""
    if value is None:
        return None
    return value.value if hasattr(value, "value") else value

"""
Consultant job assignment repository implementation.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from job_allocation.application.interfaces.repositories import (
    AssignmentRepositoryInterface,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.assignment_status import AssignmentStatus
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage
from job_allocation.infrastructure.database.models.consultant import ConsultantModel
from job_allocation.infrastructure.database.models.consultant_job_assignment import (
    ConsultantJobAssignmentModel,
)
from job_allocation.infrastructure.database.repositories.consultant_repository import (
    ConsultantRepository,
)

logger = get_logger(__name__)


class AssignmentRepository(AssignmentRepositoryInterface):
    """Assignment history repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, assignment: ConsultantJobAssignment) -> ConsultantJobAssignment:
        """Create a new assignment row."""
        model = ConsultantJobAssignmentModel(
            id=assignment.id,
            job_id=assignment.job_id,
            consultant_id=assignment.consultant_id,
            status=AssignmentStatus(assignment.status).value,
            assigned_by=assignment.assigned_by,
            assigned_at=assignment.assigned_at,
            assignment_source=AssignmentSource(assignment.assignment_source).value,
            pipeline_stage=PipelineStage(assignment.pipeline_stage).value,
            pipeline_progress=assignment.pipeline_progress,
            pipeline_note=assignment.pipeline_note,
            pipeline_updated_at=assignment.pipeline_updated_at,
            pipeline_updated_by=assignment.pipeline_updated_by,
        )

        self.db.add(model)
        await self.db.flush()

        logger.debug(
            "Assignment created",
            assignment_id=str(model.id),
            job_id=str(model.job_id),
            consultant_id=str(model.consultant_id),
        )
        return self._model_to_entity(model)

    async def update(self, assignment: ConsultantJobAssignment) -> ConsultantJobAssignment:
        """Persist status and pipeline of an assignment."""
        stmt = (
            update(ConsultantJobAssignmentModel)
            .where(ConsultantJobAssignmentModel.id == assignment.id)
            .values(
                status=AssignmentStatus(assignment.status).value,
                pipeline_stage=PipelineStage(assignment.pipeline_stage).value,
                pipeline_progress=assignment.pipeline_progress,
                pipeline_note=assignment.pipeline_note,
                pipeline_updated_at=assignment.pipeline_updated_at,
                pipeline_updated_by=assignment.pipeline_updated_by,
            )
        )

        await self.db.execute(stmt)
        await self.db.flush()
        return assignment

    async def find_active_by_job(self, job_id: UUID) -> List[ConsultantJobAssignment]:
        """ACTIVE assignments of a job, newest first."""
        stmt = (
            select(ConsultantJobAssignmentModel)
            .where(
                ConsultantJobAssignmentModel.job_id == job_id,
                ConsultantJobAssignmentModel.status == AssignmentStatus.ACTIVE.value,
            )
            .order_by(ConsultantJobAssignmentModel.assigned_at.desc())
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def find_active(
        self, job_id: UUID, consultant_id: Optional[UUID] = None
    ) -> Optional[ConsultantJobAssignment]:
        """Newest ACTIVE assignment of a job, optionally for one consultant."""
        stmt = select(ConsultantJobAssignmentModel).where(
            ConsultantJobAssignmentModel.job_id == job_id,
            ConsultantJobAssignmentModel.status == AssignmentStatus.ACTIVE.value,
        )
        if consultant_id:
            stmt = stmt.where(ConsultantJobAssignmentModel.consultant_id == consultant_id)
        stmt = stmt.order_by(ConsultantJobAssignmentModel.assigned_at.desc()).limit(1)

        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def count_active_by_consultant(self, consultant_id: UUID) -> int:
        """Number of ACTIVE assignments held by a consultant."""
        stmt = select(func.count(ConsultantJobAssignmentModel.id)).where(
            ConsultantJobAssignmentModel.consultant_id == consultant_id,
            ConsultantJobAssignmentModel.status == AssignmentStatus.ACTIVE.value,
        )
        return (await self.db.execute(stmt)).scalar_one()

    async def find_consultants_by_job(self, job_id: UUID) -> List[Consultant]:
        """Consultants holding an ACTIVE assignment on a job."""
        stmt = (
            select(ConsultantModel)
            .join(
                ConsultantJobAssignmentModel,
                ConsultantJobAssignmentModel.consultant_id == ConsultantModel.id,
            )
            .where(
                ConsultantJobAssignmentModel.job_id == job_id,
                ConsultantJobAssignmentModel.status == AssignmentStatus.ACTIVE.value,
            )
            .order_by(ConsultantJobAssignmentModel.assigned_at.desc())
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        mapper = ConsultantRepository(self.db)
        return [mapper._model_to_entity(model) for model in models]

    def _model_to_entity(
        self, model: ConsultantJobAssignmentModel
    ) -> ConsultantJobAssignment:
        """Convert SQLAlchemy model to domain entity."""
        return ConsultantJobAssignment(
            id=model.id,
            job_id=model.job_id,
            consultant_id=model.consultant_id,
            assigned_by=model.assigned_by,
            status=AssignmentStatus(model.status),
            assignment_source=AssignmentSource(model.assignment_source)
            if model.assignment_source
            else AssignmentSource.default(),
            assigned_at=model.assigned_at,
            pipeline_stage=PipelineStage(model.pipeline_stage),
            pipeline_progress=model.pipeline_progress or 0,
            pipeline_note=model.pipeline_note,
            pipeline_updated_at=model.pipeline_updated_at,
            pipeline_updated_by=model.pipeline_updated_by,
        )

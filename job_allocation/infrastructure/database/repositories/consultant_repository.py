"""
Consultant repository implementation.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, case, exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from job_allocation.application.interfaces.repositories import (
    ConsultantRepositoryInterface,
    ConsultantSearchCriteria,
)
from job_allocation.config.logging import get_logger
from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.value_objects.consultant_role import ConsultantRole
from job_allocation.domain.value_objects.consultant_status import (
    ConsultantAvailability,
    ConsultantStatus,
)
from job_allocation.infrastructure.database.models.consultant import (
    ConsultantIndustryModel,
    ConsultantLanguageModel,
    ConsultantModel,
)

logger = get_logger(__name__)


class ConsultantRepository(ConsultantRepositoryInterface):
    """Consultant repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, consultant_id: UUID) -> Optional[Consultant]:
        """Get consultant by ID."""
        stmt = select(ConsultantModel).where(ConsultantModel.id == consultant_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def increment_current_jobs(self, consultant_id: UUID, amount: int = 1) -> None:
        """Add to a consultant's workload counter."""
        stmt = (
            update(ConsultantModel)
            .where(ConsultantModel.id == consultant_id)
            .values(
                current_jobs=ConsultantModel.current_jobs + amount,
                updated_at=datetime.now(timezone.utc),
            )
        )
        await self._execute_counter_update(stmt, consultant_id, amount)

    async def decrement_current_jobs(self, consultant_id: UUID, amount: int = 1) -> None:
        """Subtract from a consultant's workload counter, clamped at zero."""
        stmt = (
            update(ConsultantModel)
            .where(ConsultantModel.id == consultant_id)
            .values(
                current_jobs=case(
                    (
                        ConsultantModel.current_jobs > amount,
                        ConsultantModel.current_jobs - amount,
                    ),
                    else_=0,
                ),
                updated_at=datetime.now(timezone.utc),
            )
        )
        await self._execute_counter_update(stmt, consultant_id, -amount)

    async def find_for_assignment(
        self, criteria: ConsultantSearchCriteria
    ) -> Tuple[List[Consultant], int]:
        """Page of active consultants in a region, least loaded first."""
        conditions = self._assignment_conditions(criteria)

        stmt = (
            select(ConsultantModel)
            .where(*conditions)
            .order_by(
                ConsultantModel.current_jobs.asc(),
                ConsultantModel.max_jobs.asc(),
                ConsultantModel.first_name.asc(),
                ConsultantModel.id.asc(),
            )
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        count_stmt = select(func.count(ConsultantModel.id)).where(*conditions)

        result = await self.db.execute(stmt)
        models = result.scalars().all()
        total = (await self.db.execute(count_stmt)).scalar_one()

        return [self._model_to_entity(model) for model in models], total

    async def find_active_by_region(self, region_id: UUID) -> List[Consultant]:
        """Active consultants of a region ordered by first name."""
        stmt = (
            select(ConsultantModel)
            .where(
                ConsultantModel.region_id == region_id,
                ConsultantModel.status == ConsultantStatus.ACTIVE.value,
            )
            .order_by(ConsultantModel.first_name.asc(), ConsultantModel.id.asc())
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def _execute_counter_update(self, stmt, consultant_id: UUID, delta: int) -> None:
        """Run a workload counter update and flag unknown consultants."""
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            logger.warning(
                "Workload counter update matched no consultant",
                consultant_id=str(consultant_id),
                delta=delta,
            )

    def _assignment_conditions(self, criteria: ConsultantSearchCriteria) -> list:
        """Build WHERE clauses for the consultant selection list."""
        conditions = [
            ConsultantModel.status == ConsultantStatus.ACTIVE.value,
            ConsultantModel.region_id == criteria.region_id,
        ]

        if criteria.role:
            conditions.append(ConsultantModel.role == criteria.role)

        if criteria.availability:
            conditions.append(_availability_condition(criteria.availability))

        if criteria.industry:
            conditions.append(
                exists().where(
                    ConsultantIndustryModel.consultant_id == ConsultantModel.id,
                    func.lower(ConsultantIndustryModel.industry)
                    == criteria.industry.lower(),
                )
            )

        if criteria.language:
            conditions.append(
                exists().where(
                    ConsultantLanguageModel.consultant_id == ConsultantModel.id,
                    func.lower(ConsultantLanguageModel.language)
                    == criteria.language.lower(),
                )
            )

        if criteria.search:
            pattern = f"%{criteria.search}%"
            conditions.append(
                or_(
                    ConsultantModel.first_name.ilike(pattern),
                    ConsultantModel.last_name.ilike(pattern),
                    ConsultantModel.email.ilike(pattern),
                )
            )

        return conditions

    def _model_to_entity(self, model: ConsultantModel) -> Consultant:
        """Convert SQLAlchemy model to domain entity."""
        return Consultant(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            region_id=model.region_id,
            role=ConsultantRole(model.role),
            status=ConsultantStatus(model.status),
            availability=ConsultantAvailability(model.availability)
            if model.availability
            else None,
            current_jobs=model.current_jobs or 0,
            max_jobs=model.max_jobs or 0,
            industries=[tag.industry for tag in model.industries],
            languages=[tag.language for tag in model.languages],
        )


def _availability_condition(availability: str):
    """Match explicit availability, or the one implied by the workload counter."""
    implicit = ConsultantModel.availability.is_(None)
    at_capacity = and_(
        ConsultantModel.max_jobs > 0,
        ConsultantModel.current_jobs >= ConsultantModel.max_jobs,
    )

    if availability == ConsultantAvailability.AT_CAPACITY.value:
        return or_(
            ConsultantModel.availability == availability, and_(implicit, at_capacity)
        )
    if availability == ConsultantAvailability.AVAILABLE.value:
        return or_(
            ConsultantModel.availability == availability,
            and_(
                implicit,
                or_(
                    ConsultantModel.max_jobs <= 0,
                    ConsultantModel.current_jobs < ConsultantModel.max_jobs,
                ),
            ),
        )
    return ConsultantModel.availability == availability

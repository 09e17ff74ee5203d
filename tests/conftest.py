"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator, List, Optional, Tuple
from unittest.mock import AsyncMock
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from job_allocation.application.interfaces.notifications import (
    ConsultantNotification,
    NotificationDispatcherInterface,
)
from job_allocation.application.interfaces.repositories import (
    AssignmentRepositoryInterface,
    ConsultantRepositoryInterface,
    JobRepositoryInterface,
)
from job_allocation.application.services.retry_handler import (
    RetryHandler,
    RetryingExecutor,
)
from job_allocation.infrastructure.database.models import (
    Base,
    CompanyModel,
    ConsultantIndustryModel,
    ConsultantJobAssignmentModel,
    ConsultantLanguageModel,
    ConsultantModel,
    JobModel,
    RegionModel,
)
from job_allocation.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingDispatcher(NotificationDispatcherInterface):
    """Dispatcher that keeps every notification in memory."""

    def __init__(self):
        self.sent: List[Tuple[UUID, ConsultantNotification]] = []

    @property
    def name(self) -> str:
        return "recording"

    async def notify(self, consultant_id: UUID, notification: ConsultantNotification):
        self.sent.append((consultant_id, notification))


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def unit_of_work(session_factory) -> SqlAlchemyUnitOfWork:
    """Unit of work with short budgets."""
    return SqlAlchemyUnitOfWork(session_factory, max_wait_seconds=5, timeout_seconds=5)


@pytest.fixture
def executor(unit_of_work) -> RetryingExecutor:
    """Executor with the default single transient retry."""
    return RetryingExecutor(unit_of_work, RetryHandler(max_retries=1))


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """In-memory notification dispatcher."""
    return RecordingDispatcher()


class Seeder:
    """Inserts allocation fixtures through the ORM and commits each one."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _save(self, model):
        async with self.session_factory() as session:
            session.add(model)
            await session.commit()
        return model

    async def region(self, name: str = "Sydney") -> RegionModel:
        return await self._save(RegionModel(name=name))

    async def company(
        self, name: str = "Harbour Health", region_id: Optional[UUID] = None
    ) -> CompanyModel:
        return await self._save(CompanyModel(name=name, region_id=region_id))

    async def consultant(
        self,
        first_name: str,
        region_id: Optional[UUID],
        last_name: str = "Smith",
        current_jobs: int = 0,
        max_jobs: int = 5,
        role: str = "CONSULTANT",
        status: str = "ACTIVE",
        availability: Optional[str] = None,
        industries: Tuple[str, ...] = (),
        languages: Tuple[str, ...] = (),
    ) -> ConsultantModel:
        model = ConsultantModel(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}@example.com",
            region_id=region_id,
            role=role,
            status=status,
            availability=availability,
            current_jobs=current_jobs,
            max_jobs=max_jobs,
        )
        model.industries = [ConsultantIndustryModel(industry=i) for i in industries]
        model.languages = [ConsultantLanguageModel(language=lang) for lang in languages]
        return await self._save(model)

    async def job(
        self,
        title: str = "Registered Nurse",
        company_id: Optional[UUID] = None,
        region_id: Optional[UUID] = None,
        status: str = "OPEN",
        job_code: Optional[str] = None,
    ) -> JobModel:
        return await self._save(
            JobModel(
                title=title,
                company_id=company_id,
                region_id=region_id,
                status=status,
                job_code=job_code,
            )
        )

    async def get_consultant(self, consultant_id: UUID) -> ConsultantModel:
        async with self.session_factory() as session:
            return await session.get(ConsultantModel, consultant_id)

    async def get_job(self, job_id: UUID) -> JobModel:
        async with self.session_factory() as session:
            return await session.get(JobModel, job_id)

    async def assignments(self, job_id: UUID) -> List[ConsultantJobAssignmentModel]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ConsultantJobAssignmentModel)
                .where(ConsultantJobAssignmentModel.job_id == job_id)
                .order_by(ConsultantJobAssignmentModel.assigned_at.asc())
            )
            return list(result.scalars().all())


@pytest.fixture
def seed(session_factory) -> Seeder:
    """Fixture factory for regions, companies, consultants and jobs."""
    return Seeder(session_factory)


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    return AsyncMock(spec=JobRepositoryInterface)


@pytest.fixture
def mock_consultant_repository():
    """Mock consultant repository."""
    return AsyncMock(spec=ConsultantRepositoryInterface)


@pytest.fixture
def mock_assignment_repository():
    """Mock assignment repository."""
    return AsyncMock(spec=AssignmentRepositoryInterface)

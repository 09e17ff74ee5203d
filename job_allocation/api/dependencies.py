"""
FastAPI dependency injection container.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from job_allocation.application.interfaces.notifications import (
    NotificationDispatcherInterface,
)
from job_allocation.application.services.assignment_notifier import AssignmentNotifier
from job_allocation.application.services.retry_handler import (
    RetryHandler,
    RetryingExecutor,
)
from job_allocation.application.services.selection_service import SelectionService
from job_allocation.application.use_cases.allocate_job import AllocateJobUseCase
from job_allocation.application.use_cases.auto_assign_job import AutoAssignJobUseCase
from job_allocation.application.use_cases.unassign_job import UnassignJobUseCase
from job_allocation.application.use_cases.update_pipeline import UpdatePipelineUseCase
from job_allocation.config.database import get_session_factory
from job_allocation.config.logging import get_logger
from job_allocation.config.settings import settings
from job_allocation.infrastructure.database.repositories.assignment_repository import (
    AssignmentRepository,
)
from job_allocation.infrastructure.database.repositories.consultant_repository import (
    ConsultantRepository,
)
from job_allocation.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from job_allocation.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from job_allocation.infrastructure.notifications import build_notification_dispatcher

logger = get_logger(__name__)


@dataclass
class ActingUser:
    """User performing an allocation, as forwarded by the auth gateway."""

    id: str
    name: Optional[str] = None


# Database Dependencies
def get_session_factory_dependency() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory."""
    return get_session_factory()


async def get_db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(
        get_session_factory_dependency
    ),
) -> AsyncGenerator[AsyncSession, None]:
    """Read-side database session for one request."""
    async with session_factory() as session:
        yield session


async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_consultant_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ConsultantRepository:
    """Get consultant repository instance."""
    return ConsultantRepository(db)


async def get_assignment_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AssignmentRepository:
    """Get assignment repository instance."""
    return AssignmentRepository(db)


# Service Dependencies
async def get_selection_service(
    job_repo: JobRepository = Depends(get_job_repository),
    consultant_repo: ConsultantRepository = Depends(get_consultant_repository),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repository),
) -> SelectionService:
    """Get selection service instance."""
    return SelectionService(
        job_repo,
        consultant_repo,
        assignment_repo,
        job_page_size=settings.JOB_ALLOCATION_PAGE_SIZE,
        consultant_page_size=settings.CONSULTANT_PAGE_SIZE,
    )


async def get_retrying_executor(
    session_factory: async_sessionmaker[AsyncSession] = Depends(
        get_session_factory_dependency
    ),
) -> RetryingExecutor:
    """Get a unit-of-work executor with the transient retry policy."""
    unit_of_work = SqlAlchemyUnitOfWork(
        session_factory,
        max_wait_seconds=settings.ALLOCATION_TRANSACTION_MAX_WAIT_SECONDS,
        timeout_seconds=settings.ALLOCATION_TRANSACTION_TIMEOUT_SECONDS,
    )
    return RetryingExecutor(
        unit_of_work, RetryHandler(max_retries=settings.ALLOCATION_TRANSIENT_RETRIES)
    )


@lru_cache(maxsize=1)
def get_notification_dispatcher() -> NotificationDispatcherInterface:
    """Get the process-wide notification dispatcher."""
    dispatcher = build_notification_dispatcher(settings)
    logger.info("Notification dispatcher configured", dispatcher=dispatcher.name)
    return dispatcher


async def get_assignment_notifier(
    dispatcher: NotificationDispatcherInterface = Depends(get_notification_dispatcher),
) -> AssignmentNotifier:
    """Get assignment notifier instance."""
    return AssignmentNotifier(
        dispatcher, timeout_seconds=settings.NOTIFICATION_TIMEOUT_SECONDS
    )


# Use Case Dependencies
async def get_allocate_job_use_case(
    executor: RetryingExecutor = Depends(get_retrying_executor),
    notifier: AssignmentNotifier = Depends(get_assignment_notifier),
) -> AllocateJobUseCase:
    """Get allocate job use case instance."""
    return AllocateJobUseCase(executor, notifier)


async def get_auto_assign_job_use_case(
    selection_service: SelectionService = Depends(get_selection_service),
    allocate_job: AllocateJobUseCase = Depends(get_allocate_job_use_case),
) -> AutoAssignJobUseCase:
    """Get auto-assign job use case instance."""
    return AutoAssignJobUseCase(selection_service, allocate_job)


async def get_unassign_job_use_case(
    executor: RetryingExecutor = Depends(get_retrying_executor),
) -> UnassignJobUseCase:
    """Get unassign job use case instance."""
    return UnassignJobUseCase(executor)


async def get_update_pipeline_use_case(
    executor: RetryingExecutor = Depends(get_retrying_executor),
) -> UpdatePipelineUseCase:
    """Get update pipeline use case instance."""
    return UpdatePipelineUseCase(executor)


# Request context
async def get_acting_user(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_name: Annotated[Optional[str], Header()] = None,
) -> ActingUser:
    """Acting user from the headers set by the auth gateway."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return ActingUser(id=x_user_id.strip(), name=(x_user_name or "").strip() or None)


# Type aliases for cleaner dependency injection
SelectionServiceDep = Annotated[SelectionService, Depends(get_selection_service)]
AllocateJobUseCaseDep = Annotated[AllocateJobUseCase, Depends(get_allocate_job_use_case)]
AutoAssignJobUseCaseDep = Annotated[
    AutoAssignJobUseCase, Depends(get_auto_assign_job_use_case)
]
UnassignJobUseCaseDep = Annotated[UnassignJobUseCase, Depends(get_unassign_job_use_case)]
UpdatePipelineUseCaseDep = Annotated[
    UpdatePipelineUseCase, Depends(get_update_pipeline_use_case)
]
ActingUserDep = Annotated[ActingUser, Depends(get_acting_user)]

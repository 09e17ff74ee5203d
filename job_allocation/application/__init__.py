"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the business logic of the application.
"""

from .interfaces import (
    AssignmentRepositoryInterface,
    ConsultantRepositoryInterface,
    JobRepositoryInterface,
    NotificationDispatcherInterface,
    UnitOfWorkInterface,
)
from .services import AssignmentNotifier, RetryHandler, RetryingExecutor, SelectionService
from .use_cases import (
    AllocateJobUseCase,
    AutoAssignJobUseCase,
    UnassignJobUseCase,
    UpdatePipelineUseCase,
)

__all__ = [
    # Interfaces
    "AssignmentRepositoryInterface",
    "ConsultantRepositoryInterface",
    "JobRepositoryInterface",
    "NotificationDispatcherInterface",
    "UnitOfWorkInterface",
    # Services
    "AssignmentNotifier",
    "RetryHandler",
    "RetryingExecutor",
    "SelectionService",
    # Use Cases
    "AllocateJobUseCase",
    "AutoAssignJobUseCase",
    "UnassignJobUseCase",
    "UpdatePipelineUseCase",
]

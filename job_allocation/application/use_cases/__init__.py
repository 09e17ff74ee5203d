"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .allocate_job import AllocateJobRequest, AllocateJobUseCase, AllocationResult
from .auto_assign_job import AutoAssignJobRequest, AutoAssignJobUseCase, AutoAssignResult
from .unassign_job import UnassignJobUseCase, UnassignOutcome, UnassignResult
from .update_pipeline import UpdatePipelineRequest, UpdatePipelineUseCase

__all__ = [
    "AllocateJobRequest",
    "AllocateJobUseCase",
    "AllocationResult",
    "AutoAssignJobRequest",
    "AutoAssignJobUseCase",
    "AutoAssignResult",
    "UnassignJobUseCase",
    "UnassignOutcome",
    "UnassignResult",
    "UpdatePipelineRequest",
    "UpdatePipelineUseCase",
]

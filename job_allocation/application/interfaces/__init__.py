"""
Application interfaces package.
"""

from .notifications import ConsultantNotification, NotificationDispatcherInterface
from .repositories import (
    AllocationStats,
    AssignmentFacet,
    AssignmentRepositoryInterface,
    ConsultantRepositoryInterface,
    ConsultantSearchCriteria,
    JobAllocationFilters,
    JobAllocationView,
    JobRepositoryInterface,
    TransactionContext,
)
from .services import UnitOfWorkInterface

__all__ = [
    "AllocationStats",
    "AssignmentFacet",
    "AssignmentRepositoryInterface",
    "ConsultantNotification",
    "ConsultantRepositoryInterface",
    "ConsultantSearchCriteria",
    "JobAllocationFilters",
    "JobAllocationView",
    "JobRepositoryInterface",
    "NotificationDispatcherInterface",
    "TransactionContext",
    "UnitOfWorkInterface",
]

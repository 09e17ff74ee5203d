"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.entities.job import Job


class AssignmentFacet:
    """Assignment-status facet of the allocation job list."""

    ALL = "ALL"
    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"

    VALUES = (ALL, ASSIGNED, UNASSIGNED)


@dataclass
class JobAllocationFilters:
    """Filters for listing jobs that need allocation."""

    region_id: Optional[UUID] = None
    region_ids: Optional[List[UUID]] = None
    company_id: Optional[UUID] = None
    consultant_id: Optional[UUID] = None
    search: Optional[str] = None
    assignment_status: str = AssignmentFacet.ALL
    limit: int = 10
    offset: int = 0


@dataclass
class ConsultantSearchCriteria:
    """Filters for listing consultants eligible for a region."""

    region_id: UUID
    role: Optional[str] = None
    availability: Optional[str] = None
    industry: Optional[str] = None
    language: Optional[str] = None
    search: Optional[str] = None
    limit: int = 25
    offset: int = 0


@dataclass
class JobAllocationView:
    """Job row of the allocation list, joined with names for display."""

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


@dataclass
class AllocationStats:
    """Allocation counters among open and on-hold jobs."""

    total: int
    unassigned: int
    assigned: int


@dataclass
class TransactionContext:
    """Repositories bound to a single unit of work."""

    jobs: "JobRepositoryInterface"
    consultants: "ConsultantRepositoryInterface"
    assignments: "AssignmentRepositoryInterface"


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID, for_update: bool = False) -> Optional[Job]:
        """Get job by ID, optionally locking the row for the transaction."""
        pass

    @abstractmethod
    async def update_allocation(self, job: Job) -> Job:
        """Persist region, assigned consultant, source and mode of a job."""
        pass

    @abstractmethod
    async def get_company_region_id(self, company_id: UUID) -> Optional[UUID]:
        """Get the region of a job's company."""
        pass

    @abstractmethod
    async def find_for_allocation(
        self, filters: JobAllocationFilters
    ) -> Tuple[List[JobAllocationView], int]:
        """Page of open/on-hold jobs matching the filters, plus total count."""
        pass

    @abstractmethod
    async def get_allocation_stats(self) -> AllocationStats:
        """Count open/on-hold jobs by assignment state."""
        pass


class ConsultantRepositoryInterface(ABC):
    """Consultant repository interface."""

    @abstractmethod
    async def get_by_id(self, consultant_id: UUID) -> Optional[Consultant]:
        """Get consultant by ID."""
        pass

    @abstractmethod
    async def increment_current_jobs(self, consultant_id: UUID, amount: int = 1) -> None:
        """Add to a consultant's workload counter."""
        pass

    @abstractmethod
    async def decrement_current_jobs(self, consultant_id: UUID, amount: int = 1) -> None:
        """Subtract from a consultant's workload counter, never below zero."""
        pass

    @abstractmethod
    async def find_for_assignment(
        self, criteria: ConsultantSearchCriteria
    ) -> Tuple[List[Consultant], int]:
        """Page of active consultants ordered least-loaded first, plus total."""
        pass

    @abstractmethod
    async def find_active_by_region(self, region_id: UUID) -> List[Consultant]:
        """Active consultants of a region ordered by first name."""
        pass


class AssignmentRepositoryInterface(ABC):
    """Consultant job assignment repository interface."""

    @abstractmethod
    async def create(self, assignment: ConsultantJobAssignment) -> ConsultantJobAssignment:
        """Create a new assignment row."""
        pass

    @abstractmethod
    async def update(self, assignment: ConsultantJobAssignment) -> ConsultantJobAssignment:
        """Persist status and pipeline of an assignment."""
        pass

    @abstractmethod
    async def find_active_by_job(self, job_id: UUID) -> List[ConsultantJobAssignment]:
        """ACTIVE assignments of a job, newest first."""
        pass

    @abstractmethod
    async def find_active(
        self, job_id: UUID, consultant_id: Optional[UUID] = None
    ) -> Optional[ConsultantJobAssignment]:
        """Newest ACTIVE assignment of a job, optionally for one consultant."""
        pass

    @abstractmethod
    async def count_active_by_consultant(self, consultant_id: UUID) -> int:
        """Number of ACTIVE assignments held by a consultant."""
        pass

    @abstractmethod
    async def find_consultants_by_job(self, job_id: UUID) -> List[Consultant]:
        """Consultants holding an ACTIVE assignment on a job."""
        pass

"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from job_allocation.domain.value_objects.assignment_mode import AssignmentMode
from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.job_status import JobStatus


@dataclass
class Job:
    """Job opening, reduced to the fields the allocation engine reads or writes."""

    title: str
    company_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)
    job_code: Optional[str] = None
    status: JobStatus = JobStatus.OPEN
    region_id: Optional[UUID] = None
    assigned_consultant_id: Optional[UUID] = None
    assignment_source: Optional[AssignmentSource] = None
    assignment_mode: Optional[AssignmentMode] = None
    category: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data."""
        if not self.title or not self.title.strip():
            raise ValueError("Job title is required")

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def is_assigned(self) -> bool:
        """Check if the job currently has an owning consultant."""
        return self.assigned_consultant_id is not None

    def needs_allocation(self) -> bool:
        """Check if the job is in the allocation queue."""
        return JobStatus(self.status).needs_allocation()

    def assign_to(
        self,
        consultant_id: UUID,
        region_id: Optional[UUID],
        source: AssignmentSource,
    ) -> None:
        """Point the job at a new owning consultant."""
        self.assigned_consultant_id = consultant_id
        self.confirm_assignment(region_id, source)

    def confirm_assignment(
        self, region_id: Optional[UUID], source: AssignmentSource
    ) -> None:
        """Refresh region, source and mode without changing the owner."""
        self.region_id = region_id
        self.assignment_source = source
        self.assignment_mode = source.assignment_mode
        self.updated_at = datetime.now(timezone.utc)

    def clear_assignment(self) -> None:
        """Remove every allocation field."""
        self.region_id = None
        self.assigned_consultant_id = None
        self.assignment_source = None
        self.assignment_mode = None
        self.updated_at = datetime.now(timezone.utc)

"""
Consultant domain entity.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID, uuid4

from job_allocation.domain.value_objects.consultant_role import ConsultantRole
from job_allocation.domain.value_objects.consultant_status import (
    ConsultantAvailability,
    ConsultantStatus,
)


@dataclass
class Consultant:
    """Consultant (recruiter) who can own job openings."""

    first_name: str
    last_name: str
    id: UUID = field(default_factory=uuid4)
    email: Optional[str] = None
    region_id: Optional[UUID] = None
    role: ConsultantRole = ConsultantRole.CONSULTANT
    status: ConsultantStatus = ConsultantStatus.ACTIVE
    availability: Optional[ConsultantAvailability] = None
    current_jobs: int = 0
    max_jobs: int = 0
    industries: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        """First and last name joined."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_at_capacity(self) -> bool:
        """Check if the consultant reached a configured job ceiling."""
        return self.max_jobs > 0 and self.current_jobs >= self.max_jobs

    def effective_availability(self) -> ConsultantAvailability:
        """Explicit availability, or one derived from the workload counter."""
        if self.availability:
            return ConsultantAvailability(self.availability)
        if self.is_at_capacity:
            return ConsultantAvailability.AT_CAPACITY
        return ConsultantAvailability.AVAILABLE

    def can_receive_jobs(self) -> bool:
        """Check if the consultant is eligible for allocation."""
        return ConsultantStatus(self.status).can_receive_jobs()

    def to_dict(self) -> dict:
        """Convert consultant to dictionary."""
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "region_id": str(self.region_id) if self.region_id else None,
            "role": ConsultantRole(self.role).value,
            "status": ConsultantStatus(self.status).value,
            "availability": self.effective_availability().value,
            "current_jobs": self.current_jobs,
            "max_jobs": self.max_jobs,
        }

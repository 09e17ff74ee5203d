"""
Job assigned domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class JobAssigned:
    """Event raised when a consultant becomes the owner of a job."""

    job_id: UUID
    job_title: str
    consultant_id: UUID
    changed_by: Optional[str]
    is_reassignment: bool = False
    previous_consultant_id: Optional[UUID] = None
    previous_consultant_name: Optional[str] = None
    reason: Optional[str] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

"""
Job reassigned away domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class JobReassignedAway:
    """Event raised when a job is taken from its previous owner."""

    job_id: UUID
    job_title: str
    consultant_id: UUID
    new_consultant_id: UUID
    new_consultant_name: str
    changed_by: Optional[str]
    reason: Optional[str] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

"""
Job status value object.
"""

from enum import Enum
from typing import List


class JobStatus(str, Enum):
    """Job opening status enumeration."""

    DRAFT = "DRAFT"
    OPEN = "OPEN"
    ON_HOLD = "ON_HOLD"
    CLOSED = "CLOSED"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

    @classmethod
    def allocatable(cls) -> List["JobStatus"]:
        """Statuses of jobs that still need an owning consultant."""
        return [cls.OPEN, cls.ON_HOLD]

    def needs_allocation(self) -> bool:
        """Check if a job in this status belongs in the allocation queue."""
        return self in self.allocatable()

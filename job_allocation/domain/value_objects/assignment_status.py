"""
Assignment status value object.
"""

from enum import Enum


class AssignmentStatus(str, Enum):
    """Consultant job assignment status enumeration."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def is_active(self) -> bool:
        """Check if the assignment currently owns the job."""
        return self == self.ACTIVE

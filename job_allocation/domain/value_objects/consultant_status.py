"""
Consultant status and availability value objects.
"""

from enum import Enum


class ConsultantStatus(str, Enum):
    """Consultant employment status enumeration."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"

    def can_receive_jobs(self) -> bool:
        """Check if consultants in this status are eligible for allocation."""
        return self == self.ACTIVE


class ConsultantAvailability(str, Enum):
    """Consultant availability enumeration."""

    AVAILABLE = "AVAILABLE"
    AT_CAPACITY = "AT_CAPACITY"
    UNAVAILABLE = "UNAVAILABLE"

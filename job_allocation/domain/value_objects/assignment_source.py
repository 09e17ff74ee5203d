"""
Assignment source value object.
"""

from enum import Enum

from job_allocation.domain.value_objects.assignment_mode import AssignmentMode


class AssignmentSource(str, Enum):
    """How a job came to be assigned."""

    MANUAL_HRM8 = "MANUAL_HRM8"
    AUTO_RULES = "AUTO_RULES"
    IMPORTED = "IMPORTED"
    SYSTEM_REASSIGNMENT = "SYSTEM_REASSIGNMENT"

    @property
    def assignment_mode(self) -> AssignmentMode:
        """Assignment mode implied by this source."""
        if self == self.AUTO_RULES:
            return AssignmentMode.AUTO
        return AssignmentMode.MANUAL

    @classmethod
    def default(cls) -> "AssignmentSource":
        """Source used when a caller does not provide one."""
        return cls.MANUAL_HRM8

"""
Consultant role value object.
"""

from enum import Enum
from typing import Optional


def normalize_enum_token(value: Optional[str]) -> Optional[str]:
    """Normalize free-form filter input such as 'senior consultant' to SENIOR_CONSULTANT."""
    if value is None:
        return None
    token = value.strip().upper().replace("-", "_").replace(" ", "_")
    return token or None


class ConsultantRole(str, Enum):
    """Consultant role enumeration."""

    CONSULTANT = "CONSULTANT"
    SENIOR_CONSULTANT = "SENIOR_CONSULTANT"
    TEAM_LEAD = "TEAM_LEAD"
    REGIONAL_MANAGER = "REGIONAL_MANAGER"

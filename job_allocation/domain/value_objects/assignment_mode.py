"""
Assignment mode value object.
"""

from enum import Enum


class AssignmentMode(str, Enum):
    """Whether a job's consultant is chosen by a person or by rules."""

    MANUAL = "MANUAL"
    AUTO = "AUTO"

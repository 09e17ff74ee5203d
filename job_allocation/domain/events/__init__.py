"""
Domain events package.
"""

from typing import Union

from .job_assigned import JobAssigned
from .job_reassigned_away import JobReassignedAway

AssignmentChanged = Union[JobAssigned, JobReassignedAway]

__all__ = [
    "AssignmentChanged",
    "JobAssigned",
    "JobReassignedAway",
]

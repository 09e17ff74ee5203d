"""
Database repositories package.
"""

from .assignment_repository import AssignmentRepository
from .consultant_repository import ConsultantRepository
from .job_repository import JobRepository

__all__ = [
    "AssignmentRepository",
    "ConsultantRepository",
    "JobRepository",
]

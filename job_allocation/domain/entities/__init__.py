"""
Domain entities package.
"""

from .consultant import Consultant
from .consultant_job_assignment import ConsultantJobAssignment
from .job import Job

__all__ = [
    "Consultant",
    "ConsultantJobAssignment",
    "Job",
]

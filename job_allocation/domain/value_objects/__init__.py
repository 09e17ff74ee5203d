"""
Domain value objects package.
"""

from .assignment_mode import AssignmentMode
from .assignment_source import AssignmentSource
from .assignment_status import AssignmentStatus
from .consultant_role import ConsultantRole, normalize_enum_token
from .consultant_status import ConsultantAvailability, ConsultantStatus
from .job_status import JobStatus
from .pipeline_stage import PipelineStage
from .pipeline_state import PipelineState

__all__ = [
    "AssignmentMode",
    "AssignmentSource",
    "AssignmentStatus",
    "ConsultantAvailability",
    "ConsultantRole",
    "ConsultantStatus",
    "JobStatus",
    "PipelineStage",
    "PipelineState",
    "normalize_enum_token",
]

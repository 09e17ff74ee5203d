"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Consultant",
    "ConsultantJobAssignment",
    "Job",

    # Events
    "AssignmentChanged",
    "JobAssigned",
    "JobReassignedAway",

    # Exceptions
    "AllocationError",
    "AssignmentNotFoundError",
    "ConsultantNotFoundError",
    "JobNotFoundError",
    "JobRegionMissingError",
    "NoEligibleConsultantError",
    "NotificationDeliveryError",
    "ReassignmentReasonRequiredError",
    "TransactionError",
    "TransactionTimeoutError",
    "TransientTransactionError",
    "ValidationError",

    # Value Objects
    "AssignmentMode",
    "AssignmentSource",
    "AssignmentStatus",
    "ConsultantAvailability",
    "ConsultantRole",
    "ConsultantStatus",
    "JobStatus",
    "PipelineStage",
    "PipelineState",
]

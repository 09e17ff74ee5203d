"""
Domain exceptions package.
"""

from .allocation_error import (
    AllocationError,
    AssignmentNotFoundError,
    ConsultantNotFoundError,
    JobNotFoundError,
    JobRegionMissingError,
    NoEligibleConsultantError,
    ReassignmentReasonRequiredError,
)
from .notification_error import NotificationDeliveryError
from .transaction_error import (
    TransactionError,
    TransactionTimeoutError,
    TransientTransactionError,
)
from .validation_error import OutOfRangeError, RequiredFieldError, ValidationError

__all__ = [
    "AllocationError",
    "AssignmentNotFoundError",
    "ConsultantNotFoundError",
    "JobNotFoundError",
    "JobRegionMissingError",
    "NoEligibleConsultantError",
    "NotificationDeliveryError",
    "OutOfRangeError",
    "ReassignmentReasonRequiredError",
    "RequiredFieldError",
    "TransactionError",
    "TransactionTimeoutError",
    "TransientTransactionError",
    "ValidationError",
]

"""
Application services package.
"""

from .assignment_notifier import AssignmentNotifier
from .retry_handler import RetryHandler, RetryingExecutor
from .selection_service import (
    AssignmentInfo,
    ConsultantPage,
    JobPage,
    PipelineView,
    SelectionService,
)

__all__ = [
    "AssignmentInfo",
    "AssignmentNotifier",
    "ConsultantPage",
    "JobPage",
    "PipelineView",
    "RetryHandler",
    "RetryingExecutor",
    "SelectionService",
]

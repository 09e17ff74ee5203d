"""
API schemas for the Job Allocation Engine.
"""

from .allocation import (
    AllocateJobBody,
    AllocationResponse,
    AllocationStatsResponse,
    AssignConsultantBody,
    AssignmentInfoResponse,
    AutoAssignBody,
    BulkUnassignBody,
    BulkUnassignResponse,
    ConsultantListResponse,
    JobAllocationListResponse,
    PipelineResponse,
    UnassignResponse,
    UpdatePipelineBody,
)
from .common import BaseResponse, ErrorResponse, PaginatedResponse

__all__ = [
    "AllocateJobBody",
    "AllocationResponse",
    "AllocationStatsResponse",
    "AssignConsultantBody",
    "AssignmentInfoResponse",
    "AutoAssignBody",
    "BaseResponse",
    "BulkUnassignBody",
    "BulkUnassignResponse",
    "ConsultantListResponse",
    "ErrorResponse",
    "JobAllocationListResponse",
    "PaginatedResponse",
    "PipelineResponse",
    "UnassignResponse",
    "UpdatePipelineBody",
]

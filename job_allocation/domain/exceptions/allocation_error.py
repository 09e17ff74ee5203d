"""
Allocation-related domain exceptions.
"""

from uuid import UUID


class AllocationError(Exception):
    """Base exception for allocation business errors."""

    pass


class JobNotFoundError(AllocationError):
    """Raised when a job does not exist."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class ConsultantNotFoundError(AllocationError):
    """Raised when a consultant does not exist."""

    def __init__(self, consultant_id: UUID):
        self.consultant_id = consultant_id
        super().__init__(f"Consultant {consultant_id} not found")


class AssignmentNotFoundError(AllocationError):
    """Raised when a consultant holds no active assignment on a job."""

    def __init__(self, job_id: UUID, consultant_id: UUID):
        self.job_id = job_id
        self.consultant_id = consultant_id
        super().__init__(
            f"No active assignment for consultant {consultant_id} on job {job_id}"
        )


class ReassignmentReasonRequiredError(AllocationError):
    """Raised when a job changes owner without a reason."""

    def __init__(self, job_id: UUID, previous_consultant_id: UUID):
        self.job_id = job_id
        self.previous_consultant_id = previous_consultant_id
        super().__init__("Reason is required for reassignment")


class JobRegionMissingError(AllocationError):
    """Raised when neither a job nor its company has a region."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} (and its company) has no region assigned")


class NoEligibleConsultantError(AllocationError):
    """Raised when auto-assignment finds nobody in the region."""

    def __init__(self, job_id: UUID, region_id: UUID):
        self.job_id = job_id
        self.region_id = region_id
        super().__init__(f"No suitable consultant for auto-assignment in region {region_id}")

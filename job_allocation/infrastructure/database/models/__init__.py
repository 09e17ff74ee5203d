"""
Database models package.
"""

from .base import Base, BaseModel
from .company import CompanyModel
from .consultant import (
    ConsultantIndustryModel,
    ConsultantLanguageModel,
    ConsultantModel,
)
from .consultant_job_assignment import ConsultantJobAssignmentModel
from .job import JobModel
from .region import RegionModel

__all__ = [
    "Base",
    "BaseModel",
    "CompanyModel",
    "ConsultantIndustryModel",
    "ConsultantJobAssignmentModel",
    "ConsultantLanguageModel",
    "ConsultantModel",
    "JobModel",
    "RegionModel",
]

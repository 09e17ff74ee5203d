"""
Job SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from job_allocation.domain.value_objects.job_status import JobStatus

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    title = Column(String(255), nullable=False)
    job_code = Column(String(50), index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id"), index=True)
    status = Column(String(20), default=JobStatus.OPEN.value, nullable=False, index=True)
    category = Column(String(100))
    location = Column(Text)

    # Allocation fields; assigned_consultant_id mirrors the ACTIVE assignment
    region_id = Column(Uuid(as_uuid=True), ForeignKey("regions.id"), index=True)
    assigned_consultant_id = Column(
        Uuid(as_uuid=True), ForeignKey("consultants.id"), index=True
    )
    assignment_source = Column(String(50))
    assignment_mode = Column(String(20))

    # Relationships
    company = relationship("CompanyModel", back_populates="jobs")
    region = relationship("RegionModel")
    assigned_consultant = relationship("ConsultantModel")
    assignments = relationship("ConsultantJobAssignmentModel", back_populates="job")

    __table_args__ = (
        Index("idx_job_status_assigned", "status", "assigned_consultant_id"),
        Index("idx_job_status_region", "status", "region_id"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, title={self.title[:50]})>"

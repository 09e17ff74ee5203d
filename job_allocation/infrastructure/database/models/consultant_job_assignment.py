"""
Consultant job assignment SQLAlchemy model.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import relationship

from job_allocation.domain.value_objects.assignment_status import AssignmentStatus
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage

from .base import BaseModel, utcnow


class ConsultantJobAssignmentModel(BaseModel):
    """Assignment history database model. Rows are never deleted."""

    __tablename__ = "consultant_job_assignments"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    consultant_id = Column(
        Uuid(as_uuid=True), ForeignKey("consultants.id"), nullable=False, index=True
    )
    status = Column(
        String(20), default=AssignmentStatus.ACTIVE.value, nullable=False, index=True
    )
    assigned_by = Column(String(255), nullable=False)
    assigned_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    assignment_source = Column(String(50))

    # Pipeline sub-state, carried forward across reassignment
    pipeline_stage = Column(
        String(20), default=PipelineStage.SOURCING.value, nullable=False
    )
    pipeline_progress = Column(Integer, default=0, nullable=False)
    pipeline_note = Column(Text)
    pipeline_updated_at = Column(DateTime(timezone=True))
    pipeline_updated_by = Column(String(255))

    # Relationships
    job = relationship("JobModel", back_populates="assignments")
    consultant = relationship("ConsultantModel", back_populates="assignments")

    __table_args__ = (
        Index("idx_assignment_job_status", "job_id", "status"),
        Index("idx_assignment_consultant_status", "consultant_id", "status"),
        # At most one ACTIVE assignment per job
        Index(
            "uq_assignment_active_job",
            "job_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<ConsultantJobAssignment(id={self.id}, job_id={self.job_id}, "
            f"consultant_id={self.consultant_id}, status={self.status})>"
        )

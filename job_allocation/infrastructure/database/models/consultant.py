"""
Consultant SQLAlchemy models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from job_allocation.domain.value_objects.consultant_role import ConsultantRole
from job_allocation.domain.value_objects.consultant_status import ConsultantStatus

from .base import BaseModel


class ConsultantModel(BaseModel):
    """Consultant database model."""

    __tablename__ = "consultants"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), index=True)
    region_id = Column(Uuid(as_uuid=True), ForeignKey("regions.id"), index=True)
    role = Column(String(50), default=ConsultantRole.CONSULTANT.value, nullable=False)
    status = Column(
        String(20), default=ConsultantStatus.ACTIVE.value, nullable=False, index=True
    )
    availability = Column(String(20))

    # Workload; mutated only inside allocation transactions
    current_jobs = Column(Integer, default=0, nullable=False)
    max_jobs = Column(Integer, default=0, nullable=False)

    # Relationships
    industries = relationship(
        "ConsultantIndustryModel",
        back_populates="consultant",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    languages = relationship(
        "ConsultantLanguageModel",
        back_populates="consultant",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    assignments = relationship(
        "ConsultantJobAssignmentModel", back_populates="consultant"
    )

    __table_args__ = (
        CheckConstraint("current_jobs >= 0", name="ck_consultant_current_jobs_non_negative"),
        Index("idx_consultant_region_status_load", "region_id", "status", "current_jobs"),
    )

    def __repr__(self) -> str:
        return f"<Consultant(id={self.id}, name={self.first_name} {self.last_name})>"


class ConsultantIndustryModel(BaseModel):
    """Industry expertise tag of a consultant."""

    __tablename__ = "consultant_industries"

    consultant_id = Column(
        Uuid(as_uuid=True), ForeignKey("consultants.id"), nullable=False, index=True
    )
    industry = Column(String(100), nullable=False, index=True)

    consultant = relationship("ConsultantModel", back_populates="industries")

    __table_args__ = (
        Index("idx_consultant_industry_unique", "consultant_id", "industry", unique=True),
    )


class ConsultantLanguageModel(BaseModel):
    """Spoken language tag of a consultant."""

    __tablename__ = "consultant_languages"

    consultant_id = Column(
        Uuid(as_uuid=True), ForeignKey("consultants.id"), nullable=False, index=True
    )
    language = Column(String(50), nullable=False, index=True)

    consultant = relationship("ConsultantModel", back_populates="languages")

    __table_args__ = (
        Index("idx_consultant_language_unique", "consultant_id", "language", unique=True),
    )

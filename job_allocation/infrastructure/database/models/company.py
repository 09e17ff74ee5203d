"""
Company SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class CompanyModel(BaseModel):
    """Company database model. Read-only input to allocation."""

    __tablename__ = "companies"

    name = Column(String(255), nullable=False, index=True)
    region_id = Column(Uuid(as_uuid=True), ForeignKey("regions.id"), index=True)

    # Relationships
    region = relationship("RegionModel")
    jobs = relationship("JobModel", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name})>"

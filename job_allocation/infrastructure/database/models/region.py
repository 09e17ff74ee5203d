"""
Region SQLAlchemy model.
"""

from sqlalchemy import Column, String

from .base import BaseModel


class RegionModel(BaseModel):
    """Region database model. Owned by region administration; read-only here."""

    __tablename__ = "regions"

    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Region(id={self.id}, name={self.name})>"

"""
Database package.
"""

from .unit_of_work import SqlAlchemyUnitOfWork, is_transient_error

__all__ = [
    "SqlAlchemyUnitOfWork",
    "is_transient_error",
]

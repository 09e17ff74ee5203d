"""
Job Allocation Engine.

Assigns job openings to consultants and keeps assignment history,
job pointers and consultant workloads consistent.
"""

__version__ = "0.1.0"
__author__ = "TradeEngage Team"
__description__ = "Job Allocation Engine"

from .api import create_app
from .config import settings

__all__ = [
    "create_app",
    "settings",
]

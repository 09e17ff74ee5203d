"""
Configuration package.
"""

from .database import *
from .logging import *
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",

    # Database
    "get_database_url",
    "create_engine",
    "build_session_factory",
    "get_engine",
    "get_session_factory",
    "get_database_health",
    "close_database_connections",

    # Logging
    "configure_logging",
    "bind_request_context",
    "clear_request_context",
    "get_logger",
]

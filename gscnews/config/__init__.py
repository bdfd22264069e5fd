"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ErrorCode,
    GSCNewsError,
    SearchError,
    StorageError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "GSCNewsError",
    "SearchError",
    "StorageError",
]

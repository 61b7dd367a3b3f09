"""
Domain enums for the configuration system.
"""

from enum import Enum


class AuthType(Enum):
    """Authentication types for SQL Server connections."""

    INTEGRATED = "integrated"
    SQL = "sql"

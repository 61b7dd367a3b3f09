"""
Configuration domain package.

This package contains the domain layer for check settings.
"""

from .enums import AuthType
from .settings import (
    DEFAULT_ERROR_FILE,
    DEFAULT_OUTPUT_FILE,
    ConnectionSettings,
    ReportSettings,
    validate_instance_name,
)

__all__ = [
    "AuthType",
    "ConnectionSettings",
    "DEFAULT_ERROR_FILE",
    "DEFAULT_OUTPUT_FILE",
    "ReportSettings",
    "validate_instance_name",
]

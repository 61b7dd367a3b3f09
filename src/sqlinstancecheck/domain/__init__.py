"""
Domain layer for SqlInstanceCheck.

Pure data structures and exception types with no I/O dependencies.
"""

from sqlinstancecheck.domain.errors import (
    DatabaseEnumerationError,
    InstanceResolutionError,
    ProviderUnavailableError,
    ReportFormattingError,
    SqlInstanceCheckError,
)
from sqlinstancecheck.domain.models import (
    NEVER_BACKED_UP,
    Configuration,
    Database,
    DatabaseStatus,
    Instance,
    LoginMode,
    RecoveryModel,
)

__all__ = [
    # Models
    "Configuration",
    "Database",
    "Instance",
    "NEVER_BACKED_UP",
    # Enums
    "DatabaseStatus",
    "LoginMode",
    "RecoveryModel",
    # Errors
    "DatabaseEnumerationError",
    "InstanceResolutionError",
    "ProviderUnavailableError",
    "ReportFormattingError",
    "SqlInstanceCheckError",
]

"""
Exception types raised by a check run.

Everything except ProviderUnavailableError is caught by the run boundary
and written to the error file as a single line.
"""

from __future__ import annotations


class SqlInstanceCheckError(Exception):
    """Base class for check failures."""

    def __init__(self, message: str, *, instance_name: str | None = None) -> None:
        self.message = message
        self.instance_name = instance_name
        super().__init__(message)


class InstanceResolutionError(SqlInstanceCheckError):
    """The instance could not be resolved (unreachable, login failed, not found)."""


class DatabaseEnumerationError(SqlInstanceCheckError):
    """Listing the databases of a resolved instance failed."""


class ReportFormattingError(SqlInstanceCheckError):
    """A value could not be read while building a report section."""

    def __init__(self, section: str, cause: Exception) -> None:
        self.section = section
        self.cause = cause
        super().__init__(f"Failed to format section [{section}]: {cause}")


class ProviderUnavailableError(SqlInstanceCheckError):
    """The database management provider cannot be used at all (e.g. no ODBC driver)."""

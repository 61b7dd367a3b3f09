"""
Application layer package.

Contains the check pipeline and the pure report row mapping.
"""

from sqlinstancecheck.application.check_service import (
    CheckResult,
    CheckService,
    enumerate_databases,
    resolve_instance,
    sort_databases,
)
from sqlinstancecheck.application.provider import DatabaseManagementProvider
from sqlinstancecheck.application.report_rows import ReportSection, build_sections

__all__ = [
    "CheckResult",
    "CheckService",
    "DatabaseManagementProvider",
    "ReportSection",
    "build_sections",
    "enumerate_databases",
    "resolve_instance",
    "sort_databases",
]

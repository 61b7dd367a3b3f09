"""
Infrastructure layer package.

Contains all I/O and external system integrations:
- SQL Server connectivity and the pyodbc provider (sql/)
- Configuration file loading
- Logging setup
- Plain-text report rendering and file output
"""

from sqlinstancecheck.infrastructure.config_loader import ConfigLoader
from sqlinstancecheck.infrastructure.logging_config import setup_logging
from sqlinstancecheck.infrastructure.text_report import (
    render_report,
    render_section,
    write_error,
    write_report,
)

__all__ = [
    # Config
    "ConfigLoader",
    # Logging
    "setup_logging",
    # Report
    "render_report",
    "render_section",
    "write_error",
    "write_report",
]

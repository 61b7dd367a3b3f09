"""
SQL Server infrastructure package.

Provides SQL Server connectivity and the pyodbc-backed provider.
"""

from sqlinstancecheck.infrastructure.sql.connector import SqlConnector, detect_odbc_driver
from sqlinstancecheck.infrastructure.sql.provider import SqlServerProvider

__all__ = [
    "SqlConnector",
    "SqlServerProvider",
    "detect_odbc_driver",
]

"""
SQL Server connection and query execution module.

Handles:
- ODBC driver detection and fallback
- Connection string building
- Query execution and result parsing
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

import pyodbc

from sqlinstancecheck.domain.config import AuthType, ConnectionSettings
from sqlinstancecheck.domain.errors import ProviderUnavailableError


logger = logging.getLogger(__name__)

# Preferred drivers (newest first)
PREFERRED_DRIVERS = [
    "ODBC Driver 18 for SQL Server",
    "ODBC Driver 17 for SQL Server",
    "ODBC Driver 13 for SQL Server",
    "ODBC Driver 11 for SQL Server",
]

FALLBACK_DRIVERS = [
    "SQL Server Native Client 11.0",
    "SQL Server Native Client 10.0",
    "SQL Server",
]


def detect_odbc_driver() -> str:
    """
    Detect best available ODBC driver.

    Returns:
        ODBC driver name

    Raises:
        ProviderUnavailableError: If no suitable driver found
    """
    drivers = pyodbc.drivers()
    logger.debug("Available ODBC drivers: %s", drivers)

    for driver in PREFERRED_DRIVERS:
        if driver in drivers:
            logger.info("Using ODBC driver: %s", driver)
            return driver

    for driver in FALLBACK_DRIVERS:
        if driver in drivers:
            logger.warning("Using fallback ODBC driver: %s", driver)
            return driver

    raise ProviderUnavailableError(
        "No SQL Server ODBC driver found. Please install ODBC Driver 17 or 18."
    )


def quote_odbc_value(value: str) -> str:
    """Brace-quote a connection string value so ';' and '}' are taken literally."""
    return "{" + value.replace("}", "}}") + "}"


class SqlConnector:
    """
    SQL Server connection manager for a single instance.

    Opens a connection per query against master; nothing is pooled.
    """

    def __init__(self, server_instance: str, driver: str, settings: ConnectionSettings | None = None):
        """
        Initialize SQL connector.

        Args:
            server_instance: Server instance string (e.g., "SERVER\\INSTANCE" or "SERVER,PORT")
            driver: ODBC driver name
            settings: Authentication and timeout settings
        """
        self.server_instance = server_instance
        self.driver = driver
        self.settings = settings or ConnectionSettings()
        self._connection_string: str | None = None

        logger.debug(
            "SqlConnector initialized for %s (auth=%s)",
            server_instance, self.settings.auth_type.value,
        )

    def build_connection_string(self) -> str:
        """
        Build ODBC connection string.

        Returns:
            Connection string
        """
        if self._connection_string:
            return self._connection_string

        parts = [
            f"DRIVER={{{self.driver}}}",
            f"SERVER={self.server_instance}",
            "DATABASE=master",
            f"TIMEOUT={self.settings.connect_timeout}",
            "Encrypt=no",
            "TrustServerCertificate=yes",
        ]

        if self.settings.auth_type is AuthType.INTEGRATED:
            parts.append("Trusted_Connection=yes")
        else:
            if not self.settings.username or not self.settings.password:
                raise ValueError("Username and password required for SQL authentication")
            parts.append(f"UID={quote_odbc_value(self.settings.username)}")
            parts.append(f"PWD={quote_odbc_value(self.settings.password)}")

        self._connection_string = ";".join(parts)
        logger.debug("Connection string built (credentials masked)")
        return self._connection_string

    def execute_query(self, query: str) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dictionaries.

        Args:
            query: SQL query string

        Returns:
            List of dictionaries (column name -> value)

        Raises:
            pyodbc.Error: If connection or query execution fails
        """
        conn_str = self.build_connection_string()

        with pyodbc.connect(conn_str) as conn:
            cursor = conn.cursor()
            cursor.execute(query)

            columns = [column[0] for column in cursor.description] if cursor.description else []
            rows = cursor.fetchall()

            results = []
            for row in rows:
                row_dict = {}
                for i, column in enumerate(columns):
                    value = row[i]
                    # Keep datetimes for backup history; everything else as plain scalars
                    if value is None or isinstance(value, (str, int, float, bool, datetime)):
                        row_dict[column] = value
                    elif isinstance(value, Decimal):
                        row_dict[column] = int(value) if value == value.to_integral_value() else float(value)
                    else:
                        row_dict[column] = str(value)
                results.append(row_dict)

            logger.debug("Query returned %d rows, %d columns", len(results), len(columns))
            return results

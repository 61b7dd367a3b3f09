"""
SQL Server database management provider.

Implements DatabaseManagementProvider over pyodbc: resolves an instance from
SERVERPROPERTY and sys.configurations, and lists databases from
sys.databases joined with msdb backup history.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import pyodbc

from sqlinstancecheck.domain.config import ConnectionSettings
from sqlinstancecheck.domain.errors import DatabaseEnumerationError
from sqlinstancecheck.domain.models import (
    Configuration,
    Database,
    DatabaseStatus,
    Instance,
    LoginMode,
    RecoveryModel,
)
from sqlinstancecheck.infrastructure.sql import queries
from sqlinstancecheck.infrastructure.sql.connector import SqlConnector, detect_odbc_driver

logger = logging.getLogger(__name__)

# sys.databases.state_desc -> display status
STATE_MAP = {
    "ONLINE": DatabaseStatus.NORMAL,
    "OFFLINE": DatabaseStatus.OFFLINE,
    "OFFLINE_SECONDARY": DatabaseStatus.OFFLINE,
    "RESTORING": DatabaseStatus.RESTORING,
    "RECOVERING": DatabaseStatus.RECOVERING,
    "RECOVERY_PENDING": DatabaseStatus.RECOVERY_PENDING,
    "SUSPECT": DatabaseStatus.SUSPECT,
    "EMERGENCY": DatabaseStatus.EMERGENCY,
}

RECOVERY_MODEL_MAP = {
    "FULL": RecoveryModel.FULL,
    "SIMPLE": RecoveryModel.SIMPLE,
    "BULK_LOGGED": RecoveryModel.BULK_LOGGED,
}


def map_login_mode(integrated_only: Any) -> LoginMode:
    if integrated_only is None:
        return LoginMode.UNKNOWN
    return LoginMode.INTEGRATED if int(integrated_only) == 1 else LoginMode.MIXED


def map_configuration(rows: List[Dict[str, Any]]) -> Configuration:
    """
    Build a Configuration from sys.configurations run values.

    Raises:
        ValueError: If any of the four settings is missing
    """
    values = {}
    for row in rows:
        attr = queries.CONFIGURATION_SETTINGS.get(row.get("SettingName"))
        if attr:
            values[attr] = int(row["RunValue"])

    missing = set(queries.CONFIGURATION_SETTINGS.values()) - set(values)
    if missing:
        raise ValueError(f"Configuration settings not returned by server: {', '.join(sorted(missing))}")
    return Configuration(**values)


def map_instance(name: str, row: Dict[str, Any], configuration: Configuration) -> Instance:
    """Build an Instance from the SERVERPROPERTY row."""
    return Instance(
        name=name,
        edition=row.get("Edition") or "",
        version_string=row.get("Version") or "",
        product_level=row.get("ProductLevel") or "",
        product_update_level=row.get("ProductUpdateLevel"),
        login_mode=map_login_mode(row.get("IsIntegratedSecurityOnly")),
        configuration=configuration,
    )


def map_database(row: Dict[str, Any]) -> Database:
    """Build a Database from one sys.databases/backupset row."""
    state = (row.get("State") or "").upper()
    recovery = (row.get("RecoveryModel") or "").upper()
    return Database(
        name=row["DatabaseName"],
        is_system_object=bool(row.get("IsSystemObject")),
        compatibility_level=row.get("CompatibilityLevel"),
        status=STATE_MAP.get(state, DatabaseStatus.UNKNOWN),
        owner=row.get("Owner"),
        auto_close=bool(row.get("IsAutoCloseOn")),
        auto_shrink=bool(row.get("IsAutoShrinkOn")),
        recovery_model=RECOVERY_MODEL_MAP.get(recovery, RecoveryModel.UNKNOWN),
        last_backup_date=row.get("LastFullBackup"),
        last_differential_backup_date=row.get("LastDiffBackup"),
        last_log_backup_date=row.get("LastLogBackup"),
    )


class SqlServerProvider:
    """
    pyodbc-backed provider.

    The ODBC driver is detected on construction, so a machine without one
    fails before any check starts.
    """

    def __init__(self, settings: ConnectionSettings | None = None, driver: str | None = None):
        """
        Initialize the provider.

        Args:
            settings: Authentication and timeout settings
            driver: ODBC driver name (detected if omitted)

        Raises:
            ProviderUnavailableError: If no SQL Server ODBC driver is installed
        """
        self.settings = settings or ConnectionSettings()
        self.driver = driver or detect_odbc_driver()
        self._connectors: Dict[str, SqlConnector] = {}

    def connector_for(self, name: str) -> SqlConnector:
        if name not in self._connectors:
            self._connectors[name] = SqlConnector(name, self.driver, self.settings)
        return self._connectors[name]

    def resolve_instance(self, name: str) -> Instance:
        connector = self.connector_for(name)

        rows = connector.execute_query(queries.INSTANCE_PROPERTIES)
        if not rows:
            raise LookupError(f"Instance '{name}' returned no server properties")
        configuration = map_configuration(connector.execute_query(queries.CONFIGURATION_RUN_VALUES))

        instance = map_instance(name, rows[0], configuration)
        logger.info(
            "Detected SQL Server %s (%s) on %s",
            instance.version_string, instance.edition, rows[0].get("ServerName") or name,
        )
        return instance

    def list_databases(self, instance: Instance) -> list[Database]:
        """
        List databases with their last full, differential and log backups.

        Raises:
            DatabaseEnumerationError: If the listing query fails
        """
        try:
            rows = self.connector_for(instance.name).execute_query(queries.DATABASES_WITH_BACKUPS)
        except pyodbc.Error as e:
            raise DatabaseEnumerationError(
                f"Failed to list databases on '{instance.name}': {e}", instance_name=instance.name
            ) from e
        return [map_database(row) for row in rows]

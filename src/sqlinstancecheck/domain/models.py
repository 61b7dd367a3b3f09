"""
Domain models for SqlInstanceCheck.

This module contains the read-only snapshots a check run works with:
- The SQL Server instance and its server-wide configuration
- The databases attached to the instance, with their backup history

These models are pure data structures with no I/O dependencies.
They are built fresh by a provider on every run and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


# Backup timestamps at or before this value mean "never backed up".
# SQL Server management objects report DateTime.MinValue for such databases.
NEVER_BACKED_UP = datetime.min


# ============================================================================
# Enumerations
# ============================================================================

class LoginMode(Enum):
    """Server authentication mode."""
    INTEGRATED = "Integrated"
    MIXED = "Mixed"
    NORMAL = "Normal"
    UNKNOWN = "Unknown"


class DatabaseStatus(Enum):
    """Database state, named the way SQL Server management tooling shows it."""
    NORMAL = "Normal"
    OFFLINE = "Offline"
    RESTORING = "Restoring"
    RECOVERING = "Recovering"
    RECOVERY_PENDING = "RecoveryPending"
    SUSPECT = "Suspect"
    EMERGENCY = "EmergencyMode"
    UNKNOWN = "Unknown"


class RecoveryModel(Enum):
    """Database recovery model."""
    FULL = "Full"
    SIMPLE = "Simple"
    BULK_LOGGED = "BulkLogged"
    UNKNOWN = "Unknown"


# ============================================================================
# Core Domain Models
# ============================================================================

@dataclass
class Configuration:
    """
    Server-wide tunables, as run values (the values currently in effect).

    Attributes:
        min_server_memory: 'min server memory (MB)'
        max_server_memory: 'max server memory (MB)'
        max_degree_of_parallelism: 'max degree of parallelism'
        cost_threshold_for_parallelism: 'cost threshold for parallelism'
    """
    min_server_memory: int = 0
    max_server_memory: int = 2147483647
    max_degree_of_parallelism: int = 0
    cost_threshold_for_parallelism: int = 5


@dataclass
class Instance:
    """
    Represents one SQL Server instance.

    Attributes:
        name: Instance name as reported by the server (e.g. "SQL01\\INST1")
        edition: Edition name (e.g. "Enterprise Edition (64-bit)")
        version_string: Full version string (e.g. "15.0.4298.1")
        product_level: Product level (e.g. "RTM", "SP1")
        product_update_level: Cumulative update level (e.g. "CU21"), may be empty
        login_mode: Server authentication mode
        configuration: Server-wide configuration run values
    """
    name: str
    edition: str = ""
    version_string: str = ""
    product_level: str = ""
    product_update_level: str | None = None
    login_mode: LoginMode = LoginMode.UNKNOWN
    configuration: Configuration = field(default_factory=Configuration)


@dataclass
class Database:
    """
    Represents a database attached to an instance.

    Backup timestamps are None when msdb has no history for that type.
    """
    name: str
    is_system_object: bool = False
    compatibility_level: int | None = None
    status: DatabaseStatus = DatabaseStatus.UNKNOWN
    owner: str | None = None
    auto_close: bool = False
    auto_shrink: bool = False
    recovery_model: RecoveryModel = RecoveryModel.UNKNOWN
    last_backup_date: datetime | None = None
    last_differential_backup_date: datetime | None = None
    last_log_backup_date: datetime | None = None

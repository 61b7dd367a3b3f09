"""
Report row mapping.

Pure functions turning domain snapshots into the display rows of each
report section. Derived columns ("Never" for missing backups, enum display
names, run values under short labels) are computed here and nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

from sqlinstancecheck.domain.errors import ReportFormattingError
from sqlinstancecheck.domain.models import NEVER_BACKED_UP

NEVER = "Never"

# Section titles, in report order
INSTANCE_SECTION = "Instance Information"
MEMORY_SECTION = "Memory and Parallelism"
DATABASES_SECTION = "Databases"
BACKUPS_SECTION = "Backups"

INSTANCE_COLUMNS = ("Instance", "Edition", "Version", "Product Level", "Update Level", "Login Mode")
MEMORY_COLUMNS = ("Min Memory (MB)", "Max Memory (MB)", "MaxDOP", "CToP")
DATABASE_COLUMNS = ("Name", "Compatibility Level", "Status", "Owner", "Auto Close", "Auto Shrink")
BACKUP_COLUMNS = ("Name", "Recovery Model", "Last Full Backup", "Last Differential Backup", "Last Log Backup")


@dataclass
class ReportSection:
    """One titled table of the report."""
    title: str
    columns: tuple[str, ...]
    rows: list[tuple[str, ...]] = field(default_factory=list)


def display_value(value: Any) -> str:
    """Render a raw attribute as table text."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def backup_display(timestamp: datetime | None, timestamp_format: str) -> str:
    """
    Render a backup timestamp.

    Returns "Never" when the timestamp is missing or not after the zero-date
    sentinel, otherwise the formatted timestamp.
    """
    if timestamp is None:
        return NEVER
    if timestamp.replace(tzinfo=None) <= NEVER_BACKED_UP:
        return NEVER
    return timestamp.strftime(timestamp_format)


def instance_row(instance: Any) -> tuple[str, ...]:
    return (
        display_value(instance.name),
        display_value(instance.edition),
        display_value(instance.version_string),
        display_value(instance.product_level),
        display_value(instance.product_update_level),
        display_value(instance.login_mode),
    )


def memory_row(instance: Any) -> tuple[str, ...]:
    config = instance.configuration
    return (
        display_value(config.min_server_memory),
        display_value(config.max_server_memory),
        display_value(config.max_degree_of_parallelism),
        display_value(config.cost_threshold_for_parallelism),
    )


def database_row(database: Any) -> tuple[str, ...]:
    return (
        display_value(database.name),
        display_value(database.compatibility_level),
        display_value(database.status),
        display_value(database.owner),
        display_value(database.auto_close),
        display_value(database.auto_shrink),
    )


def backup_row(database: Any, timestamp_format: str) -> tuple[str, ...]:
    return (
        display_value(database.name),
        display_value(database.recovery_model),
        backup_display(database.last_backup_date, timestamp_format),
        backup_display(database.last_differential_backup_date, timestamp_format),
        backup_display(database.last_log_backup_date, timestamp_format),
    )


def _build_section(
    title: str,
    columns: tuple[str, ...],
    records: Iterable[Any],
    mapper: Callable[[Any], tuple[str, ...]],
) -> ReportSection:
    try:
        rows = [mapper(record) for record in records]
    except Exception as e:
        raise ReportFormattingError(title, e) from e
    return ReportSection(title=title, columns=columns, rows=rows)


def build_sections(
    instance: Any,
    databases: Sequence[Any],
    timestamp_format: str,
) -> list[ReportSection]:
    """
    Build all four report sections.

    Args:
        instance: Resolved instance with its configuration
        databases: Databases in report order
        timestamp_format: strftime format for backup timestamps

    Returns:
        Sections in report order

    Raises:
        ReportFormattingError: If any value cannot be read; no partial
            sections are returned
    """
    return [
        _build_section(INSTANCE_SECTION, INSTANCE_COLUMNS, [instance], instance_row),
        _build_section(MEMORY_SECTION, MEMORY_COLUMNS, [instance], memory_row),
        _build_section(DATABASES_SECTION, DATABASE_COLUMNS, databases, database_row),
        _build_section(
            BACKUPS_SECTION,
            BACKUP_COLUMNS,
            databases,
            lambda db: backup_row(db, timestamp_format),
        ),
    ]

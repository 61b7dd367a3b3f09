"""
Check service - resolve, enumerate, format and write one instance report.

The pipeline runs strictly in sequence:

    Resolving -> Enumerating -> Formatting -> Writing

Any failure along the way is caught once, by CheckService.run, and turned
into a single timestamped line in the error file. ProviderUnavailableError
is the exception: it propagates to the caller. The report file is only
written after every section has been rendered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from sqlinstancecheck.application.provider import DatabaseManagementProvider
from sqlinstancecheck.application.report_rows import build_sections
from sqlinstancecheck.domain.config import ReportSettings
from sqlinstancecheck.domain.errors import InstanceResolutionError, ProviderUnavailableError
from sqlinstancecheck.domain.models import Database, Instance
from sqlinstancecheck.infrastructure.text_report import (
    clear_error,
    format_error_line,
    format_error_message,
    format_timestamp,
    render_report,
    write_error,
    write_report,
)

logger = logging.getLogger(__name__)


def resolve_instance(provider: DatabaseManagementProvider, name: str) -> Instance:
    """
    Resolve an instance and its configuration.

    Raises:
        InstanceResolutionError: For an empty name or any provider failure
    """
    if not name or not name.strip():
        raise InstanceResolutionError("Instance name cannot be empty")

    logger.debug("Resolving instance %s", name)
    try:
        instance = provider.resolve_instance(name)
    except (InstanceResolutionError, ProviderUnavailableError):
        raise
    except Exception as e:
        raise InstanceResolutionError(
            f"Failed to resolve instance '{name}': {format_error_message(e)}", instance_name=name
        ) from e

    logger.info("Resolved instance %s (%s %s)", instance.name, instance.edition, instance.version_string)
    return instance


def sort_databases(databases: Sequence[Database]) -> list[Database]:
    """System databases first, then everything else by name (case-insensitive)."""
    by_name = sorted(databases, key=lambda db: (db.name.casefold(), db.name))
    return sorted(by_name, key=lambda db: bool(db.is_system_object), reverse=True)


def enumerate_databases(provider: DatabaseManagementProvider, instance: Instance) -> list[Database]:
    """List the instance's databases in report order. Provider errors propagate unchanged."""
    databases = sort_databases(provider.list_databases(instance))
    logger.info("Found %d databases on %s", len(databases), instance.name)
    return databases


@dataclass
class CheckResult:
    """Outcome of one check run."""
    instance_name: str
    success: bool
    output_file: Path | None = None
    error_file: Path | None = None
    error_message: str | None = None


class CheckService:
    """
    Runs the check pipeline for one instance.

    The provider is injected so the pipeline can run against a fake in tests.
    """

    def __init__(
        self,
        provider: DatabaseManagementProvider,
        settings: ReportSettings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the check service.

        Args:
            provider: Database management provider
            settings: Output and formatting settings (defaults if omitted)
            clock: Source of the current time for header and error lines
        """
        self.provider = provider
        self.settings = settings or ReportSettings()
        self.clock = clock

    def _timestamp(self) -> str:
        return format_timestamp(self.clock(), self.settings.timestamp_format)

    def build_report(self, instance_name: str) -> str:
        """Resolve, enumerate and render the full report text without writing it."""
        instance = resolve_instance(self.provider, instance_name)
        databases = enumerate_databases(self.provider, instance)
        sections = build_sections(instance, databases, self.settings.timestamp_format)
        return render_report(instance_name, self._timestamp(), sections, self.settings.table_width)

    def run(self, instance_name: str) -> CheckResult:
        """
        Check one instance and write either the report or the error line.

        Returns:
            CheckResult describing which file was written

        Raises:
            ProviderUnavailableError: If the provider cannot be used at all
        """
        settings = self.settings
        try:
            report = self.build_report(instance_name)
            write_report(settings.output_file, report)
        except ProviderUnavailableError:
            raise
        except Exception as e:
            logger.error("Check of %s failed: %s", instance_name, e)
            message = format_error_message(e)
            write_error(settings.error_file, format_error_line(self._timestamp(), message))
            return CheckResult(
                instance_name=instance_name,
                success=False,
                error_file=settings.error_file,
                error_message=message,
            )

        try:
            clear_error(settings.error_file)
        except OSError as e:
            logger.warning("Could not remove stale error file %s: %s", settings.error_file, e)
        logger.info("Check of %s complete: %s", instance_name, settings.output_file)
        return CheckResult(
            instance_name=instance_name,
            success=True,
            output_file=settings.output_file,
        )

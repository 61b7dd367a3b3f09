"""
Shared pytest fixtures.

Provides an in-memory provider and sample snapshots so the check pipeline
can be exercised without a SQL Server instance.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src is in python path
PROJECT_ROOT = Path(__file__).parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from sqlinstancecheck.domain.config import ReportSettings  # noqa: E402
from sqlinstancecheck.domain.models import (  # noqa: E402
    NEVER_BACKED_UP,
    Configuration,
    Database,
    DatabaseStatus,
    Instance,
    LoginMode,
    RecoveryModel,
)

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0)


class FakeProvider:
    """In-memory DatabaseManagementProvider."""

    def __init__(
        self,
        instances=None,
        databases=None,
        list_error: Exception | None = None,
        resolve_error: Exception | None = None,
    ):
        self.instances = {instance.name: instance for instance in (instances or [])}
        self.databases = databases or {}
        self.list_error = list_error
        self.resolve_error = resolve_error
        self.calls: list[tuple[str, str]] = []

    def resolve_instance(self, name: str) -> Instance:
        self.calls.append(("resolve_instance", name))
        if self.resolve_error is not None:
            raise self.resolve_error
        if name not in self.instances:
            raise LookupError(f"Instance '{name}' not found")
        return self.instances[name]

    def list_databases(self, instance: Instance) -> list[Database]:
        self.calls.append(("list_databases", instance.name))
        if self.list_error is not None:
            raise self.list_error
        return list(self.databases.get(instance.name, []))


@pytest.fixture
def sample_instance() -> Instance:
    return Instance(
        name="SQL01",
        edition="Enterprise Edition (64-bit)",
        version_string="15.0.4298.1",
        product_level="RTM",
        product_update_level="CU21",
        login_mode=LoginMode.MIXED,
        configuration=Configuration(
            min_server_memory=0,
            max_server_memory=2147483647,
            max_degree_of_parallelism=4,
            cost_threshold_for_parallelism=5,
        ),
    )


@pytest.fixture
def sample_databases() -> list[Database]:
    return [
        Database(
            name="SalesDB",
            compatibility_level=150,
            status=DatabaseStatus.NORMAL,
            owner="sa",
            recovery_model=RecoveryModel.FULL,
            last_backup_date=datetime(2026, 10, 16, 23, 0, 0),
            last_differential_backup_date=None,
            last_log_backup_date=datetime(2026, 10, 17, 9, 0, 0),
        ),
        Database(
            name="master",
            is_system_object=True,
            compatibility_level=150,
            status=DatabaseStatus.NORMAL,
            owner="sa",
            recovery_model=RecoveryModel.SIMPLE,
            last_backup_date=datetime(2026, 10, 16, 22, 0, 0),
        ),
        Database(
            name="tempdb",
            is_system_object=True,
            compatibility_level=150,
            status=DatabaseStatus.NORMAL,
            owner="sa",
            recovery_model=RecoveryModel.SIMPLE,
            last_backup_date=NEVER_BACKED_UP,
        ),
        Database(
            name="Archive",
            compatibility_level=130,
            status=DatabaseStatus.OFFLINE,
            owner="CORP\\dba",
            auto_close=True,
            auto_shrink=True,
            recovery_model=RecoveryModel.SIMPLE,
        ),
    ]


@pytest.fixture
def fake_provider(sample_instance, sample_databases) -> FakeProvider:
    return FakeProvider([sample_instance], {sample_instance.name: sample_databases})


@pytest.fixture
def report_settings(tmp_path) -> ReportSettings:
    return ReportSettings(
        output_file=tmp_path / "Check-SqlInstanceResults.txt",
        error_file=tmp_path / "Check-SqlInstanceErrors.txt",
    )

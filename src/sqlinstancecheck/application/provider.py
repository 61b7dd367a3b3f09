"""
Database management provider interface.

The check pipeline never talks to SQL Server directly. It depends on this
protocol, which the pyodbc-backed SqlServerProvider implements and which
tests replace with an in-memory fake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlinstancecheck.domain.models import Database, Instance


@runtime_checkable
class DatabaseManagementProvider(Protocol):
    """Read-only access to instance and database metadata."""

    def resolve_instance(self, name: str) -> Instance:
        """
        Resolve an instance by name, with its configuration populated.

        Raises:
            Exception: Any failure to reach, authenticate or find the instance
        """
        ...

    def list_databases(self, instance: Instance) -> list[Database]:
        """List every database attached to a resolved instance, in any order."""
        ...

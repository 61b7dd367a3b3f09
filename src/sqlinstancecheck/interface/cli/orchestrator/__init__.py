"""
CLI Orchestrator - Main Entry Point

Wires the single check command: load settings, build the provider, run the
check. Settings loading and provider construction happen outside the check's
error boundary, so a bad config file or a missing ODBC driver fails the
process instead of producing an error file.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sqlinstancecheck.application.check_service import CheckService
from sqlinstancecheck.application.provider import DatabaseManagementProvider
from sqlinstancecheck.domain.config import (
    DEFAULT_ERROR_FILE,
    DEFAULT_OUTPUT_FILE,
    ConnectionSettings,
    validate_instance_name,
)
from sqlinstancecheck.infrastructure.config_loader import ConfigLoader
from sqlinstancecheck.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

console = Console(stderr=True)

PASSWORD_ENVVAR = "SQLINSTANCECHECK_PASSWORD"

app = typer.Typer(
    name="check-sqlinstance",
    help="🗄️ Report SQL Server instance configuration, databases and backups to a text file",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def create_provider(settings: ConnectionSettings) -> DatabaseManagementProvider:
    """Build the SQL Server provider. Imported lazily so pyodbc is only needed for real checks."""
    from sqlinstancecheck.infrastructure.sql.provider import SqlServerProvider

    return SqlServerProvider(settings)


def _instance_callback(value: str) -> str:
    try:
        return validate_instance_name(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command()
def check(
    instance: str = typer.Argument(
        ...,
        help="SQL Server instance: SERVER, SERVER\\INSTANCE or SERVER,PORT.",
        callback=_instance_callback,
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output-file",
        "-o",
        help=f"Report file, overwritten on success. [dim]Default: ./{DEFAULT_OUTPUT_FILE}[/dim]",
    ),
    error_file: Optional[Path] = typer.Option(
        None,
        "--error-file",
        "-e",
        help=f"Error file, overwritten on failure. [dim]Default: ./{DEFAULT_ERROR_FILE}[/dim]",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON settings file. Command-line options take precedence over it.",
    ),
    auth: Optional[str] = typer.Option(
        None,
        "--auth",
        help="Authentication: integrated or sql.",
    ),
    username: Optional[str] = typer.Option(None, "--username", "-U", help="SQL login (auth=sql)."),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-P",
        envvar=PASSWORD_ENVVAR,
        show_envvar=True,
        help="SQL login password (auth=sql).",
    ),
    connect_timeout: Optional[int] = typer.Option(
        None,
        "--connect-timeout",
        help="Seconds to wait for the login to complete.",
    ),
    width: Optional[int] = typer.Option(None, "--width", help="Width of report tables in characters."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to file."),
):
    """
    Check one SQL Server instance and write the report.

    On success the report goes to the output file; on failure a single
    timestamped line goes to the error file instead.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file)

    settings = ConfigLoader(config).load_settings(
        {
            "output_file": output_file,
            "error_file": error_file,
            "table_width": width,
            "connection": {
                "auth": auth,
                "username": username,
                "password": password,
                "connect_timeout": connect_timeout,
            },
        }
    )

    provider = create_provider(settings.connection)
    result = CheckService(provider, settings).run(instance)

    if result.success:
        logger.info("Report written to %s", result.output_file)
    else:
        logger.info("Errors written to %s", result.error_file)

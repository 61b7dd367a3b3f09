"""
Plain-text report rendering and file output.

Sections are rendered as fixed-width rich tables onto an in-memory,
colourless console. Long values wrap inside their column and words longer
than the column are folded, so nothing is ever truncated.

The whole report is rendered before anything touches the disk and then
written with a single atomic replace.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from sqlinstancecheck.application.report_rows import ReportSection

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = "Check-SqlInstance results for {instance} on {timestamp}"


def _text_console(width: int) -> tuple[Console, io.StringIO]:
    """Create a console that writes plain text into a buffer."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=False,
    )
    return console, buffer


def render_section(section: ReportSection, width: int = 120) -> str:
    """
    Render one section as its bracketed title followed by its table.

    Args:
        section: Section to render
        width: Maximum table width in characters

    Returns:
        Section text, ending with a newline
    """
    table = Table(box=box.SIMPLE_HEAD, show_header=True, show_edge=False, pad_edge=False)
    for column in section.columns:
        table.add_column(column, overflow="fold", no_wrap=False)
    for row in section.rows:
        table.add_row(*row)

    console, buffer = _text_console(width)
    console.print(f"[{section.title}]")
    console.print(table)
    return buffer.getvalue()


def render_report(
    instance_name: str,
    timestamp: str,
    sections: Sequence[ReportSection],
    width: int = 120,
) -> str:
    """
    Render the full report: header line, then every section in order.
    """
    parts = [HEADER_TEMPLATE.format(instance=instance_name, timestamp=timestamp) + "\n"]
    for section in sections:
        parts.append("\n")
        parts.append(render_section(section, width))
    return "".join(parts)


def write_report(output_path: Path, text: str) -> Path:
    """
    Write report text, replacing any previous report atomically.

    The text goes to a temporary file in the target directory first, so a
    reader never sees a partially written report.

    Returns:
        Path to the written report
    """
    output_path = Path(output_path)
    directory = output_path.parent if str(output_path.parent) else Path(".")
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Report saved: %s (%d bytes)", output_path, len(text.encode("utf-8")))
    return output_path


def format_error_message(error: BaseException) -> str:
    """Collapse an exception into a one-line description."""
    return " ".join(str(error).split()) or type(error).__name__


def format_error_line(timestamp: str, message: str) -> str:
    """Build the single error-file line: '<timestamp>: <message>'."""
    return f"{timestamp}: {message}"


def write_error(error_path: Path, line: str) -> Path:
    """Write the error line, replacing any previous error file content."""
    error_path = Path(error_path)
    error_path.parent.mkdir(parents=True, exist_ok=True)
    error_path.write_text(line + "\n", encoding="utf-8")
    logger.debug("Error file written: %s", error_path)
    return error_path


def clear_error(error_path: Path) -> bool:
    """
    Remove an error file left by an earlier failed run.

    Returns:
        True if a stale error file was removed
    """
    error_path = Path(error_path)
    if error_path.exists():
        error_path.unlink()
        logger.info("Removed stale error file: %s", error_path)
        return True
    return False


def format_timestamp(moment: datetime, timestamp_format: str) -> str:
    return moment.strftime(timestamp_format)

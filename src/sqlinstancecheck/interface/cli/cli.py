"""
CLI main entry point.

This module provides the main entry point for the check-sqlinstance CLI,
delegating to the command orchestrator.
"""

from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the check-sqlinstance CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    # Import here to avoid circular imports
    from rich.markup import escape

    from .orchestrator import app, console

    try:
        app(args=argv, prog_name="check-sqlinstance")
        return 0
    except SystemExit as e:
        # click exits even on success
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        console.print(f"[red]❌ Error:[/red] {escape(str(e))}")
        return 1

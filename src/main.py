"""
SqlInstanceCheck - SQL Server instance configuration report.

Writes version, memory and parallelism settings, per-database options and
backup history of one SQL Server instance to a plain-text report file.
"""

import sys
from sqlinstancecheck.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())

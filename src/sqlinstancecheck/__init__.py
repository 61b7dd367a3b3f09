"""
SqlInstanceCheck - SQL Server instance configuration report.

Queries a SQL Server instance for version, memory and parallelism settings,
per-database options and backup history, and writes a plain-text report.
"""

__version__ = "1.0.0"

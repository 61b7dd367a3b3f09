"""
T-SQL queries used by the SQL Server provider.

All queries are read-only and run against master. BIT columns are cast to
INT to avoid ODBC type -16 errors on older drivers.
"""

INSTANCE_PROPERTIES = """
SELECT
    CAST(SERVERPROPERTY('ServerName') AS NVARCHAR(256)) AS ServerName,
    CAST(SERVERPROPERTY('Edition') AS NVARCHAR(256)) AS Edition,
    CAST(SERVERPROPERTY('ProductVersion') AS NVARCHAR(128)) AS Version,
    CAST(SERVERPROPERTY('ProductLevel') AS NVARCHAR(128)) AS ProductLevel,
    CAST(SERVERPROPERTY('ProductUpdateLevel') AS NVARCHAR(128)) AS ProductUpdateLevel,
    CAST(SERVERPROPERTY('IsIntegratedSecurityOnly') AS INT) AS IsIntegratedSecurityOnly
"""

# sys.configurations name -> Configuration attribute
CONFIGURATION_SETTINGS = {
    "min server memory (MB)": "min_server_memory",
    "max server memory (MB)": "max_server_memory",
    "max degree of parallelism": "max_degree_of_parallelism",
    "cost threshold for parallelism": "cost_threshold_for_parallelism",
}

CONFIGURATION_RUN_VALUES = """
SELECT
    name AS SettingName,
    CAST(value_in_use AS INT) AS RunValue
FROM sys.configurations
WHERE name IN (
    'min server memory (MB)',
    'max server memory (MB)',
    'max degree of parallelism',
    'cost threshold for parallelism'
)
"""

# database_id 1-4 are master, tempdb, model and msdb; a distribution database is also a system object
DATABASES_WITH_BACKUPS = """
SELECT
    d.name AS DatabaseName,
    CAST(CASE WHEN d.database_id <= 4 OR d.is_distributor = 1 THEN 1 ELSE 0 END AS INT) AS IsSystemObject,
    d.compatibility_level AS CompatibilityLevel,
    d.state_desc AS State,
    SUSER_SNAME(d.owner_sid) AS Owner,
    CAST(d.is_auto_close_on AS INT) AS IsAutoCloseOn,
    CAST(d.is_auto_shrink_on AS INT) AS IsAutoShrinkOn,
    d.recovery_model_desc AS RecoveryModel,
    b.LastFullBackup,
    b.LastDiffBackup,
    b.LastLogBackup
FROM sys.databases d
LEFT JOIN (
    SELECT
        database_name,
        MAX(CASE WHEN type = 'D' THEN backup_finish_date END) AS LastFullBackup,
        MAX(CASE WHEN type = 'I' THEN backup_finish_date END) AS LastDiffBackup,
        MAX(CASE WHEN type = 'L' THEN backup_finish_date END) AS LastLogBackup
    FROM msdb.dbo.backupset
    GROUP BY database_name
) b ON b.database_name = d.name
ORDER BY d.name
"""

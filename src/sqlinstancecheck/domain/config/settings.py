"""
Check settings domain models.

This module defines the settings that control where a check connects to,
how it authenticates, and where and how the report is written.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sqlinstancecheck.domain.config.enums import AuthType

DEFAULT_OUTPUT_FILE = Path("Check-SqlInstanceResults.txt")
DEFAULT_ERROR_FILE = Path("Check-SqlInstanceErrors.txt")


class ConnectionSettings(BaseModel):
    """
    How the provider connects to the instance.

    Integrated authentication needs no credentials; SQL authentication
    requires both username and password.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    auth_type: AuthType = Field(AuthType.INTEGRATED, description="Authentication method", alias="auth")
    username: Optional[str] = Field(None, description="SQL login name (auth=sql only)")
    password: Optional[str] = Field(None, description="SQL login password (auth=sql only)", repr=False)
    connect_timeout: int = Field(30, description="Seconds to wait for the login to complete", ge=1, le=600)

    @field_validator("auth_type", mode="before")
    @classmethod
    def normalize_auth(cls, v):
        """Accept auth names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def check_credentials(self) -> "ConnectionSettings":
        """SQL authentication needs a username and a password."""
        if self.auth_type is AuthType.SQL and (not self.username or not self.password):
            raise ValueError("Username and password required for SQL authentication")
        return self


class ReportSettings(BaseModel):
    """
    Settings for a single check run.

    Values come from, highest precedence first: CLI options, the JSON config
    file, then the defaults declared here.
    """

    model_config = ConfigDict(extra="ignore")

    output_file: Path = Field(DEFAULT_OUTPUT_FILE, description="Report file, overwritten on success")
    error_file: Path = Field(DEFAULT_ERROR_FILE, description="Error file, overwritten on failure")
    table_width: int = Field(120, description="Width in characters of rendered tables", ge=40, le=1000)
    timestamp_format: str = Field(
        "%Y-%m-%d %H:%M:%S",
        description="strftime format for header, error and backup timestamps",
    )
    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)

    @field_validator("timestamp_format")
    @classmethod
    def validate_timestamp_format(cls, v: str) -> str:
        """Reject empty formats, which would render every timestamp blank."""
        if not v or not v.strip():
            raise ValueError("Timestamp format cannot be empty")
        return v


def validate_instance_name(name: str) -> str:
    """
    Validate the instance name given on the command line.

    Args:
        name: Instance string (e.g. "SQL01", "SQL01\\INST1", "SQL01,1433")

    Returns:
        The stripped name

    Raises:
        ValueError: If the name is empty
    """
    if not name or not name.strip():
        raise ValueError("Instance name cannot be empty")
    return name.strip()

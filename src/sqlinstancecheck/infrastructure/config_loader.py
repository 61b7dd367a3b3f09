"""
Configuration loader module.

Loads the optional JSON settings file and merges CLI overrides on top:

    {
        "output_file": "reports/Check-SqlInstanceResults.txt",
        "error_file": "reports/Check-SqlInstanceErrors.txt",
        "table_width": 160,
        "timestamp_format": "%Y-%m-%d %H:%M:%S",
        "connection": {
            "auth": "sql",
            "credential_file": "credentials/sql01.json",
            "connect_timeout": 15
        }
    }

Precedence, highest first: CLI overrides, config file, model defaults.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from sqlinstancecheck.domain.config import ReportSettings


logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Load and validate check settings.

    Implements schema validation through the pydantic settings models.
    """

    def __init__(self, config_file: str | Path | None = None):
        """
        Initialize config loader.

        Args:
            config_file: Path to the JSON settings file, or None for defaults only
        """
        self.config_file = Path(config_file) if config_file else None
        logger.debug("ConfigLoader initialized with file: %s", self.config_file)

    def _load_json_file(self, filepath: Path, required: bool = True) -> dict | None:
        """
        Load and parse a JSON file with robust error handling.

        Args:
            filepath: Absolute or relative path to JSON file
            required: If True, raises exception on error. If False, returns None.

        Returns:
            Parsed JSON as dict, or None if optional file not found

        Raises:
            FileNotFoundError: If required file doesn't exist
            ValueError: If JSON is malformed, empty or not an object
            PermissionError: If file cannot be read
        """
        if not filepath.exists():
            if required:
                raise FileNotFoundError(f"Configuration file not found: {filepath}")
            logger.debug("Optional config not found: %s", filepath)
            return None

        try:
            content = filepath.read_text(encoding="utf-8")
        except PermissionError as e:
            raise PermissionError(
                f"Cannot read config file (permission denied): {filepath}\n"
                f"Hint: Check file permissions or if another process has it locked."
            ) from e

        if not content.strip():
            raise ValueError(f"Configuration file is empty: {filepath}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in config file: {filepath}\n"
                f"Error at line {e.lineno}, column {e.colno}: {e.msg}\n"
                f"Hint: Validate JSON syntax. Note: .json files cannot have comments."
            ) from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {filepath}")
        return data

    def _load_credential_file(self, filepath: str) -> dict:
        """
        Load credentials from a JSON file.

        Args:
            filepath: Path to credential file (relative to the config file or absolute)

        Returns:
            Dictionary with 'username' and 'password' keys
        """
        path = Path(filepath)
        if not path.is_absolute() and self.config_file is not None:
            path = self.config_file.parent / filepath

        logger.debug("Loading credentials from: %s", path)
        data = self._load_json_file(path, required=False)

        if data is None:
            logger.warning("Credential file not found: %s", filepath)
            return {}

        return {
            "username": data.get("username"),
            "password": data.get("password"),
        }

    def load_file_settings(self) -> Dict[str, Any]:
        """Raw settings from the config file, with credential files expanded."""
        if self.config_file is None:
            return {}

        logger.info("Loading settings from: %s", self.config_file)
        data = self._load_json_file(self.config_file, required=True)

        connection = dict(data.get("connection") or {})
        credential_file = connection.pop("credential_file", None)
        if credential_file and not connection.get("password"):
            creds = self._load_credential_file(credential_file)
            connection["username"] = creds.get("username") or connection.get("username")
            connection["password"] = creds.get("password")
        if connection:
            data["connection"] = connection
        return data

    def load_settings(self, overrides: Dict[str, Any] | None = None) -> ReportSettings:
        """
        Build validated settings from the config file and CLI overrides.

        Args:
            overrides: Values given on the command line; None values are ignored.
                Connection values go under the "connection" key.

        Returns:
            ReportSettings

        Raises:
            pydantic.ValidationError: If the merged settings are invalid
        """
        data = self.load_file_settings()

        for key, value in (overrides or {}).items():
            if key == "connection":
                connection = dict(data.get("connection") or {})
                connection.update({k: v for k, v in value.items() if v is not None})
                data["connection"] = connection
            elif value is not None:
                data[key] = value

        return ReportSettings.model_validate(data)

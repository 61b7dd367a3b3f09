"""
Tests for the check-sqlinstance command line.

The SQL Server provider factory is replaced with an in-memory provider.
"""

import logging

import pytest
from typer.testing import CliRunner

from sqlinstancecheck.domain.errors import ProviderUnavailableError
from sqlinstancecheck.interface.cli import main
from sqlinstancecheck.interface.cli import orchestrator
from sqlinstancecheck.interface.cli.orchestrator import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """setup_logging binds handlers to the runner's streams; drop them after each test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def use_provider(monkeypatch):
    def _use(provider):
        monkeypatch.setattr(orchestrator, "create_provider", lambda settings: provider)
    return _use


class TestCheckCommand:
    """Test cases for the check command."""

    def test_help_lists_options(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--output-file" in result.output
        assert "--error-file" in result.output

    def test_success_writes_report(self, tmp_path, use_provider, fake_provider):
        use_provider(fake_provider)
        output = tmp_path / "results.txt"
        errors = tmp_path / "errors.txt"

        result = runner.invoke(app, ["SQL01", "-o", str(output), "-e", str(errors)])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").startswith("Check-SqlInstance results for SQL01 on ")
        assert not errors.exists()

    def test_default_file_names(self, tmp_path, monkeypatch, use_provider, fake_provider):
        use_provider(fake_provider)
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["DoesNotExist"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "Check-SqlInstanceErrors.txt").exists()
        assert not (tmp_path / "Check-SqlInstanceResults.txt").exists()

    def test_unknown_instance_writes_error_file(self, tmp_path, use_provider, fake_provider):
        use_provider(fake_provider)
        output = tmp_path / "results.txt"
        errors = tmp_path / "errors.txt"

        result = runner.invoke(app, ["DoesNotExist", "-o", str(output), "-e", str(errors)])

        assert result.exit_code == 0
        assert not output.exists()
        lines = errors.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        assert "DoesNotExist" in lines[0]

    def test_width_option(self, tmp_path, use_provider, fake_provider):
        use_provider(fake_provider)
        output = tmp_path / "results.txt"

        result = runner.invoke(
            app, ["SQL01", "-o", str(output), "-e", str(tmp_path / "e.txt"), "--width", "60"]
        )

        assert result.exit_code == 0, result.output
        assert max(len(line) for line in output.read_text(encoding="utf-8").splitlines()) <= 60

    def test_config_file_and_sql_auth(self, tmp_path, monkeypatch, fake_provider):
        captured = {}

        def factory(settings):
            captured["settings"] = settings
            return fake_provider

        monkeypatch.setattr(orchestrator, "create_provider", factory)
        monkeypatch.setenv(orchestrator.PASSWORD_ENVVAR, "from-env")
        config = tmp_path / "config.json"
        config.write_text(
            '{"output_file": "%s", "connection": {"auth": "sql", "username": "checker"}}'
            % (tmp_path / "from_config.txt").as_posix(),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["SQL01", "-c", str(config), "-e", str(tmp_path / "e.txt")])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "from_config.txt").exists()
        assert captured["settings"].username == "checker"
        assert captured["settings"].password == "from-env"

    def test_empty_instance_is_usage_error(self, tmp_path, use_provider, fake_provider):
        use_provider(fake_provider)

        result = runner.invoke(app, ["  ", "-e", str(tmp_path / "e.txt")])

        assert result.exit_code == 2
        assert not (tmp_path / "e.txt").exists()

    def test_missing_driver_fails_process(self, tmp_path, monkeypatch):
        def factory(settings):
            raise ProviderUnavailableError("No SQL Server ODBC driver found.")

        monkeypatch.setattr(orchestrator, "create_provider", factory)
        errors = tmp_path / "errors.txt"

        result = runner.invoke(app, ["SQL01", "-e", str(errors)])

        assert result.exit_code != 0
        assert isinstance(result.exception, ProviderUnavailableError)
        assert not errors.exists()


class TestMain:
    """Test cases for the main() wrapper."""

    def test_unguarded_error_returns_one(self, tmp_path, monkeypatch):
        def factory(settings):
            raise ProviderUnavailableError("No SQL Server ODBC driver found.")

        monkeypatch.setattr(orchestrator, "create_provider", factory)

        assert main(["SQL01", "-e", str(tmp_path / "errors.txt")]) == 1

    def test_guarded_failure_returns_zero(self, tmp_path, use_provider, fake_provider):
        use_provider(fake_provider)
        errors = tmp_path / "errors.txt"

        assert main(["DoesNotExist", "-o", str(tmp_path / "r.txt"), "-e", str(errors)]) == 0
        assert errors.exists()

    def test_usage_error_returns_two(self):
        assert main(["  "]) == 2

"""Tests for the operational CLI commands."""

from typer.testing import CliRunner

from usergate.application.services import PasswordMigrationReport
from usergate.domain.shared import PersistenceError
from usergate.presentation.cli import app as cli_module

runner = CliRunner()


def test_secrets_generate_prints_both_secrets():
    result = runner.invoke(cli_module.app, ["secrets", "generate"])

    assert result.exit_code == 0
    assert "JWT_SECRET_KEY" in result.output
    assert "POSTGRES_PASSWORD" in result.output


def test_migrate_passwords_reports_counts(monkeypatch):
    calls = []

    async def fake_migrate(dry_run):
        calls.append(dry_run)
        return PasswordMigrationReport(
            total=3,
            already_hashed=1,
            migrated=2,
            dry_run=dry_run,
            migrated_ids=[2, 3],
        )

    monkeypatch.setattr(cli_module, "_migrate_passwords", fake_migrate)

    result = runner.invoke(cli_module.app, ["users", "migrate-passwords", "--dry-run"])

    assert result.exit_code == 0
    assert calls == [True]
    assert "Would migrate" in result.output


def test_migrate_passwords_exits_nonzero_on_database_failure(monkeypatch):
    async def failing_migrate(dry_run):
        raise PersistenceError("list_credentials", OSError("refused"))

    monkeypatch.setattr(cli_module, "_migrate_passwords", failing_migrate)

    result = runner.invoke(cli_module.app, ["users", "migrate-passwords"])

    assert result.exit_code == 1
    assert "Migration failed" in result.output

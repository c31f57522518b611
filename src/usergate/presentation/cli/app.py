"""UserGate CLI application using Typer.

Operational commands for the backend: secret generation, database checks
and schema creation, and the legacy password migration.
"""

import asyncio
import secrets

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from usergate.application.services import (
    PasswordMigrationReport,
    PasswordMigrationService,
)
from usergate.domain.shared import PersistenceError
from usergate.infrastructure.persistence.sqlalchemy.engine import (
    build_engine_from_settings,
)
from usergate.infrastructure.persistence.sqlalchemy.init_db import (
    check_connection,
    create_tables,
)
from usergate.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from usergate_auth import PasswordHashingService
from usergate_config.settings import get_settings

app = typer.Typer(
    name="usergate",
    help="UserGate - authentication and user management CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User maintenance",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(db_app)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for UserGate configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]UserGate Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


async def _check_database() -> bool:
    engine = build_engine_from_settings(get_settings())
    try:
        return await check_connection(engine)
    finally:
        await engine.dispose()


async def _init_database() -> None:
    engine = build_engine_from_settings(get_settings())
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("check")
def db_check() -> None:
    """Open one pooled connection and run SELECT 1."""
    try:
        ok = asyncio.run(_check_database())
    except (SQLAlchemyError, OSError) as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        raise typer.Exit(code=1) from e

    if not ok:
        console.print("[red]Database answered unexpectedly[/red]")
        raise typer.Exit(code=1)
    console.print("[green]Database connection OK[/green]")


@db_app.command("init")
def db_init() -> None:
    """Create missing tables. Existing tables are left untouched."""
    try:
        asyncio.run(_init_database())
    except (SQLAlchemyError, OSError) as e:
        console.print(f"[red]Schema creation failed:[/red] {e}")
        raise typer.Exit(code=1) from e
    console.print("[green]Database schema is up to date[/green]")


async def _migrate_passwords(dry_run: bool) -> PasswordMigrationReport:
    settings = get_settings()
    engine = build_engine_from_settings(settings)
    try:
        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        service = PasswordMigrationService(
            user_repository=UserRepositorySQLAlchemy(session_maker),
            password_service=PasswordHashingService(rounds=settings.bcrypt_rounds),
        )
        return await service.migrate(dry_run=dry_run)
    finally:
        await engine.dispose()


@users_app.command("migrate-passwords")
def migrate_passwords(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report what would change without writing",
    ),
) -> None:
    """Replace every plaintext stored password with a bcrypt hash."""
    try:
        report = asyncio.run(_migrate_passwords(dry_run))
    except PersistenceError as e:
        console.print(f"[red]Migration failed:[/red] {e.details}")
        raise typer.Exit(code=1) from e

    table = Table(title="Password migration" + (" (dry run)" if dry_run else ""))
    table.add_column("Result")
    table.add_column("Users", justify="right")
    table.add_row("Total", str(report.total))
    table.add_row("Already hashed", str(report.already_hashed))
    table.add_row("Would migrate" if dry_run else "Migrated", str(report.migrated))
    table.add_row("Skipped (empty)", str(report.skipped_empty))
    table.add_row("Changed during run", str(report.changed_concurrently))
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

"""Cliente CLI application using Typer.

This module provides command-line utilities for the Cliente auth backend:
secret generation for deployment configuration and database schema
management.
"""

import asyncio
import secrets

import typer
from pydantic import ValidationError
from rich.console import Console

from cliente.infrastructure.persistence.sqlalchemy import create_engine_for_url
from cliente.infrastructure.persistence.sqlalchemy.init_db import (
    drop_tables,
    init_database,
)
from cliente.log_config import configure_logging
from cliente_config import Settings, get_settings

app = typer.Typer(
    name="cliente",
    help="Cliente - authentication backend CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

# Create db subcommand group
db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Cliente configuration.

    Prints one required secret and one optional one:
    - JWT_SECRET_KEY: required, signs JWT authentication tokens
    - POSTGRES_PASSWORD: optional, only read when DATABASE_BACKEND=postgresql

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Cliente Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256 signing
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")
    console.print("[dim]# optional, PostgreSQL backend only[/dim]")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env or "
        "config/.env.dev file.[/dim]\n"
    )


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  [red]-[/red] {field}: {error['msg']}")
        raise typer.Exit(code=1) from e
    configure_logging(settings)
    return settings


async def _init_db(database_url: str) -> None:
    engine = create_engine_for_url(database_url)
    try:
        await init_database(engine)
    finally:
        await engine.dispose()


async def _reset_db(database_url: str) -> None:
    engine = create_engine_for_url(database_url)
    try:
        await drop_tables(engine)
        await init_database(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create missing tables and seed the role reference data (idempotent)."""
    settings = _load_settings()
    asyncio.run(_init_db(settings.database_url))
    console.print(
        f"[green]Database ready[/green] ([dim]{settings.database_backend}[/dim])"
    )


@db_app.command("reset")
def reset_db(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Drop every table, then recreate the schema and seed roles."""
    settings = _load_settings()
    if not force:
        typer.confirm(
            "This deletes ALL clientes and medidores. Continue?",
            abort=True,
        )
    asyncio.run(_reset_db(settings.database_url))
    console.print("[green]Database reset complete[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

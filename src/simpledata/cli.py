"""Command-line interface for SimpleData.

This module provides the CLI commands for running and managing
the SimpleData service.
"""

from typing import NoReturn

import click

from simpledata import __version__
from simpledata.core.config import get_settings
from simpledata.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="SimpleData")
def cli() -> None:
    """SimpleData - instant schema-less JSON document store.

    Settings are read from SIMPLEDATA_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the SimpleData server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting SimpleData server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "simpledata.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all database tables. Use this only in development.
    In production, use migrations instead.
    """
    import asyncio

    from simpledata.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init_db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize():
        db = get_db_manager()
        try:
            await init_database()
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.argument("name")
@click.option("--owner", required=True, help="Owning account ID")
def create_project(name: str, owner: str) -> None:
    """Create a project and print its API key.

    The key is shown only once.
    """
    import asyncio

    from simpledata.domain.exceptions import PayloadValidationError
    from simpledata.domain.services.project_service import ProjectService
    from simpledata.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                api_key, project = await ProjectService(session).create_project(name, owner)
        except PayloadValidationError as e:
            click.echo(f"Error: {e.message}", err=True)
            raise SystemExit(1)
        finally:
            await db.disconnect()

        click.echo(
            f"\nProject created successfully!\n"
            f"  Project ID: {project.id}\n"
            f"  Name:       {project.name}\n"
            f"  API Key:    {api_key}\n"
            f"\nStore the API key now; it cannot be shown again.\n"
        )

    asyncio.run(create())


@cli.command()
def info() -> None:
    """Display SimpleData configuration."""
    settings = get_settings()

    click.echo(f"""
SimpleData v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  Public URL:   {settings.public_api_url}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}

Limits:
  Page Size:    {settings.default_page_size} (max {settings.max_page_size})
  Batch Items:  {settings.batch_max_items}
  Rate Limit:   {settings.rate_limit_per_minute}/min (enabled: {settings.rate_limit_enabled})

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `simpledata` command and by `python -m simpledata`.
    """
    cli()


if __name__ == "__main__":
    main()

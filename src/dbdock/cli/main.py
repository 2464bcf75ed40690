#!/usr/bin/env python3
"""
dbdock CLI - Main entry point.

Usage:
    dbdock [OPTIONS] COMMAND [ARGS]...

Provision and manage PostgreSQL containers through Docker.
"""

from typing import Any, List, Optional

import typer

from .. import __version__
from ..orchestrator.database_options import (
    CUSTOM_DEFAULTS,
    default_options,
    parse_env_pairs,
    parse_options,
    split_values,
)
from ..orchestrator.operations import OperationError
from .decorators import fail, require_engine
from .output import out, setup_logging
from .service import get_config, get_service

SUPPORTED_TYPES = ("postgres",)


# Create the main Typer app
app = typer.Typer(
    name="dbdock",
    help="Provision and manage database containers with Docker",
    add_completion=True,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        out.info(f"dbdock version {__version__}")
        raise typer.Exit()


def _check_type(db_type: str) -> None:
    if db_type.lower() not in SUPPORTED_TYPES:
        out.error(f"Unsupported database type: {db_type}")
        out.hint(f"Supported types: {', '.join(SUPPORTED_TYPES)}")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every docker invocation.",
    ),
) -> None:
    """
    dbdock - database containers on top of Docker.

    Create a PostgreSQL container with one command, then start, stop,
    list, inspect and remove it.
    """
    try:
        config = get_config()
    except OperationError as e:
        raise fail(e)
    setup_logging("DEBUG" if verbose else config.log_level)


@app.command()
@require_engine
def create(
    db_type: str = typer.Argument(..., metavar="TYPE", help="Database type (postgres)"),
    name: str = typer.Argument(..., help="Name of the container (also the database name)"),
) -> None:
    """Create a database with default settings.

    A random password is generated and the database is named after the
    container.  Port 5432 is used, or the next free port if it is taken.
    """
    _check_type(db_type)
    opts = default_options(name, version=get_service().config.default_version)
    summary = get_service().create(opts)
    out.connection_details(summary)


@app.command(name="create-custom")
@require_engine
def create_custom(
    db_type: str = typer.Argument(..., metavar="TYPE", help="Database type (postgres)"),
    name: Optional[str] = typer.Option(None, "--name", help="Container name (required)"),
    version: Optional[str] = typer.Option(
        None, "--version", help=f"PostgreSQL version [default: {CUSTOM_DEFAULTS['version']}]"
    ),
    port: Optional[str] = typer.Option(
        None, "--port", help=f"Host port to expose [default: {CUSTOM_DEFAULTS['port']}]"
    ),
    password: Optional[str] = typer.Option(None, "--password", help="Database password"),
    user: Optional[str] = typer.Option(None, "--user", help="Database user"),
    db: Optional[str] = typer.Option(None, "--db", help="Database name"),
    volume: Optional[str] = typer.Option(None, "--volume", help="Data volume path for persistence"),
    memory: Optional[str] = typer.Option(None, "--memory", help="Memory limit (e.g. '1g')"),
    cpu: Optional[str] = typer.Option(None, "--cpu", help="CPU limit (e.g. '0.5')"),
    timezone: Optional[str] = typer.Option(
        None, "--timezone", help=f"Container timezone [default: {CUSTOM_DEFAULTS['timezone']}]"
    ),
    locale: Optional[str] = typer.Option(
        None, "--locale", help=f"Database locale [default: {CUSTOM_DEFAULTS['locale']}]"
    ),
    network: Optional[List[str]] = typer.Option(
        None, "--network", help="Docker network to join (repeatable or comma-separated)"
    ),
    init_script: Optional[List[str]] = typer.Option(
        None, "--init-script", help="SQL script run on initialization, in order (repeatable or comma-separated)"
    ),
    mount: Optional[List[str]] = typer.Option(
        None, "--mount", help="Extra volume mount SRC:DST[:OPTS] (repeatable or comma-separated)"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Extra environment variable KEY=VALUE (repeatable)"
    ),
    ssl_mode: Optional[str] = typer.Option(
        None, "--ssl-mode", help="SSL mode: disable, require, verify-ca, verify-full"
    ),
    ssl_cert: Optional[str] = typer.Option(None, "--ssl-cert", help="Path to SSL certificate"),
    ssl_key: Optional[str] = typer.Option(None, "--ssl-key", help="Path to SSL private key"),
    ssl_root_cert: Optional[str] = typer.Option(None, "--ssl-root-cert", help="Path to SSL root certificate"),
) -> None:
    """Create a database with custom configuration."""
    _check_type(db_type)

    if not name:
        out.error("--name is required for create-custom")
        out.hint(f"Example: dbdock create-custom {db_type} --name mydb")
        raise typer.Exit(1)

    raw: dict[str, Any] = {
        "name": name,
        "version": version or get_service().config.default_version,
    }
    for key, value in (
        ("port", port),
        ("password", password),
        ("username", user),
        ("database", db),
        ("volume", volume),
        ("memory", memory),
        ("cpu", cpu),
        ("timezone", timezone),
        ("locale", locale),
        ("ssl_mode", ssl_mode),
        ("ssl_cert", ssl_cert),
        ("ssl_key", ssl_key),
        ("ssl_root_cert", ssl_root_cert),
    ):
        if value is not None:
            raw[key] = value
    if network:
        raw["networks"] = split_values(network)
    if init_script:
        raw["init_scripts"] = split_values(init_script)
    if mount:
        raw["extra_mounts"] = split_values(mount)
    if env:
        raw["environment"] = parse_env_pairs(env)

    summary = get_service().create(parse_options(raw))
    out.connection_details(summary)


@app.command()
@require_engine
def start(
    name: str = typer.Argument(..., help="Name of the container to start"),
) -> None:
    """Start a stopped database container."""
    get_service().start(name)


@app.command()
@require_engine
def stop(
    name: str = typer.Argument(..., help="Name of the container to stop"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Stop immediately without waiting for a clean shutdown",
    ),
) -> None:
    """Stop a running database container."""
    get_service().stop(name, force=force)


@app.command()
@require_engine
def remove(
    name: str = typer.Argument(..., help="Name of the container to remove"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force removal even if the container is running",
    ),
) -> None:
    """Remove a database container."""
    get_service().remove(name, force=force)


@app.command(name="list")
@require_engine
def list_containers() -> None:
    """List all database containers, running and stopped."""
    out.container_table(list(get_service().list_containers()))


@app.command()
@require_engine
def show(
    name: str = typer.Argument(..., help="Name of the container"),
) -> None:
    """Show connection details for a database container."""
    out.connection_details(get_service().inspect(name))


def cli() -> None:
    """CLI entry point for the console script."""
    app(prog_name="dbdock")


if __name__ == "__main__":
    cli()

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from pgdriver.cli.commands import db, sql

app = typer.Typer(
    name="pgdriver",
    help="Model-to-SQL driver for PostgreSQL",
    no_args_is_help=True,
)

app.add_typer(sql.app, name="sql", help="Render statements without a database")
app.add_typer(db.app, name="db", help="Run queries against the configured database")


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override PGDRIVER_LOG_LEVEL")
    ] = None,
) -> None:
    from pgdriver.core.config import get_settings
    from pgdriver.core.logging import setup_logging

    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def config() -> None:
    """Show the effective settings with secrets redacted."""
    from rich.console import Console
    from rich.table import Table

    from pgdriver.core.config import get_settings
    from pgdriver.core.logging import redact_sensitive

    settings = get_settings()
    table = Table(title="pgdriver settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    for name, value in settings.model_dump(exclude={"postgresql"}).items():
        table.add_row(name, str(value))

    if settings.postgresql is None:
        table.add_row("postgresql", "[red]not configured[/red]")
    else:
        pg = settings.postgresql
        table.add_row("postgresql.dsn", redact_sensitive(pg.to_dsn()))
        table.add_row("postgresql.min", str(pg.min))
        table.add_row("postgresql.max", str(pg.max))
        table.add_row("postgresql.idle_timeout_millis", str(pg.idle_timeout_millis))

    Console().print(table)


@app.command()
def version() -> None:
    """Print the installed version."""
    from pgdriver import __version__

    typer.echo(f"pgdriver {__version__}")


if __name__ == "__main__":
    app()

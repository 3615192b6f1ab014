# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Commands that talk to the configured database."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated, Any

import typer

app = typer.Typer(no_args_is_help=True)


@app.command()
def query(
    sql: Annotated[str, typer.Argument(help="SQL with ? or $N placeholders")],
    param: Annotated[
        list[str] | None,
        typer.Option("--param", "-p", help="Bind parameter (JSON or bare string), repeatable"),
    ] = None,
) -> None:
    """Run a custom query and print the returned rows."""
    params = [_parse(p) for p in param or []]
    asyncio.run(_run_query(sql, params))


def _parse(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


async def _run_query(sql: str, params: list[Any]) -> None:
    from rich.console import Console
    from rich.table import Table

    from pgdriver.core.exceptions import PgDriverError
    from pgdriver.driver import create_driver

    try:
        driver = await create_driver()
    except PgDriverError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    try:
        rows = await driver.execute(sql, params)
    except PgDriverError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    finally:
        await driver.backend.close()

    if not rows:
        typer.echo("(0 rows)")
        return

    table = Table()
    for column in rows[0]:
        table.add_column(str(column))
    for row in rows:
        table.add_row(*(_cell(v) for v in row.values()))

    console = Console()
    console.print(table)
    console.print(f"({len(rows)} rows)", highlight=False)


def _cell(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


@app.command()
def ping() -> None:
    """Check that the configured database answers."""
    asyncio.run(_ping())


async def _ping() -> None:
    from pgdriver.core.config import get_settings
    from pgdriver.core.exceptions import PgDriverError
    from pgdriver.storage.database import close_backend, init_backend

    settings = get_settings()
    try:
        backend = await init_backend(settings)
        await backend.fetch_one("SELECT 1 AS ok")
    except PgDriverError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    finally:
        await close_backend()
    typer.echo(f"{backend.backend_name}: ok")

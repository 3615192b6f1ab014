# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Statement rendering commands (no database needed)."""

from __future__ import annotations

import json
from typing import Annotated, Any

import typer

from pgdriver.core.constants import ArrayMode, Dialect

app = typer.Typer(no_args_is_help=True)

TableOpt = Annotated[str | None, typer.Option("--table", "-t", help="Target table")]
TypeOpt = Annotated[
    str | None, typer.Option("--type", help="Model type; the table is its plural")
]
IdOpt = Annotated[str, typer.Option("--id", help="Row identifier (JSON or bare string)")]
IdFieldOpt = Annotated[str, typer.Option("--id-field", help="Identifier column")]
DialectOpt = Annotated[Dialect, typer.Option("--dialect", help="Placeholder style")]
ArrayModeOpt = Annotated[
    ArrayMode, typer.Option("--array-mode", help="How list values are marshalled")
]


def _parse(raw: str) -> Any:
    """Decode a JSON argument, falling back to the bare string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _body(raw: str) -> dict[str, Any]:
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as exc:
        typer.echo(f"Invalid JSON body: {exc}", err=True)
        raise typer.Exit(1) from exc
    if not isinstance(body, dict):
        typer.echo("The body must be a JSON object", err=True)
        raise typer.Exit(1)
    return body


def _table(table: str | None, type_: str | None) -> str:
    from pgdriver.core.exceptions import StatementError
    from pgdriver.model import ModelParams
    from pgdriver.storage.statements import table_name

    try:
        return table_name(ModelParams(table=table, type=type_))
    except StatementError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def _show(statement: Any, dialect: Dialect, array_mode: ArrayMode) -> None:
    from rich.console import Console

    from pgdriver.storage.marshal import prepare

    console = Console()
    console.print(statement.render(dialect), markup=False, highlight=False, soft_wrap=True)
    params = prepare(statement.params, array_mode)
    for index, value in enumerate(params, start=1):
        marker = f"${index}" if dialect == Dialect.POSTGRES else f"?{index}"
        console.print(f"  {marker} = {value!r}", markup=False, highlight=False, soft_wrap=True)


def _render(build: Any, dialect: Dialect, array_mode: ArrayMode) -> None:
    from pgdriver.core.exceptions import StatementError

    try:
        statement = build()
    except StatementError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    _show(statement, dialect, array_mode)


@app.command()
def insert(
    body: Annotated[str, typer.Argument(help="Row fields as a JSON object")],
    table: TableOpt = None,
    type_: TypeOpt = None,
    dialect: DialectOpt = Dialect.POSTGRES,
    array_mode: ArrayModeOpt = ArrayMode.NATIVE,
) -> None:
    """Render an INSERT … RETURNING * statement."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    fields = _body(body)
    _render(lambda: statements.insert(target, fields), dialect, array_mode)


@app.command()
def select(
    ident: IdOpt,
    table: TableOpt = None,
    type_: TypeOpt = None,
    id_field: IdFieldOpt = "id",
    dialect: DialectOpt = Dialect.POSTGRES,
) -> None:
    """Render a SELECT by identifier."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    _render(
        lambda: statements.select_by_id(target, id_field, _parse(ident)),
        dialect,
        ArrayMode.NATIVE,
    )


@app.command()
def update(
    ident: IdOpt,
    body: Annotated[str, typer.Argument(help="Fields to set as a JSON object")],
    table: TableOpt = None,
    type_: TypeOpt = None,
    id_field: IdFieldOpt = "id",
    dialect: DialectOpt = Dialect.POSTGRES,
    array_mode: ArrayModeOpt = ArrayMode.NATIVE,
) -> None:
    """Render an UPDATE … RETURNING * statement."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    fields = _body(body)
    _render(
        lambda: statements.update_by_id(target, id_field, _parse(ident), fields),
        dialect,
        array_mode,
    )


@app.command()
def delete(
    ident: IdOpt,
    table: TableOpt = None,
    type_: TypeOpt = None,
    id_field: IdFieldOpt = "id",
    dialect: DialectOpt = Dialect.POSTGRES,
) -> None:
    """Render a DELETE by identifier."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    _render(
        lambda: statements.delete_by_id(target, id_field, _parse(ident)),
        dialect,
        ArrayMode.NATIVE,
    )


@app.command()
def append(
    ident: IdOpt,
    column: Annotated[str, typer.Argument(help="Array column")],
    value: Annotated[str, typer.Argument(help="Value to append (JSON or bare string)")],
    table: TableOpt = None,
    type_: TypeOpt = None,
    id_field: IdFieldOpt = "id",
    dialect: DialectOpt = Dialect.POSTGRES,
    array_mode: ArrayModeOpt = ArrayMode.NATIVE,
) -> None:
    """Render an array_append update."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    _render(
        lambda: statements.array_append(target, id_field, _parse(ident), column, _parse(value)),
        dialect,
        array_mode,
    )


@app.command()
def remove(
    ident: IdOpt,
    column: Annotated[str, typer.Argument(help="Array column")],
    value: Annotated[str, typer.Argument(help="Value to remove (JSON or bare string)")],
    table: TableOpt = None,
    type_: TypeOpt = None,
    id_field: IdFieldOpt = "id",
    dialect: DialectOpt = Dialect.POSTGRES,
    array_mode: ArrayModeOpt = ArrayMode.NATIVE,
) -> None:
    """Render an array_remove update."""
    from pgdriver.storage import statements

    target = _table(table, type_)
    _render(
        lambda: statements.array_remove(target, id_field, _parse(ident), column, _parse(value)),
        dialect,
        array_mode,
    )

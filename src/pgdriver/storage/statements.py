# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQL statement builders for model-backed tables.

Every builder returns a :class:`Statement` whose text uses ``?`` markers
in binding order.  Identifiers are always double-quoted and values never
reach the SQL text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from pgdriver.core.constants import TABLE_SUFFIX
from pgdriver.core.exceptions import StatementError
from pgdriver.storage.query_adapter import adapt_query


@dataclass(frozen=True)
class Statement:
    """A parameterized SQL statement."""

    sql: str
    params: tuple[Any, ...] = ()

    def render(self, dialect: str) -> str:
        """Return the SQL text with placeholders for *dialect*."""
        return adapt_query(self.sql, dialect)


class TableParams(Protocol):
    table: str | None
    type: str | None


def table_name(params: TableParams) -> str:
    """Derive the target table: explicit ``table``, else pluralised ``type``."""
    if params.table:
        return params.table
    if params.type:
        return params.type + TABLE_SUFFIX
    raise StatementError("Model params need a 'table' or a 'type'")


def quote_ident(name: str) -> str:
    """Double-quote an identifier; ``schema.table`` is quoted per part."""
    if not name:
        raise StatementError("Identifier must not be empty")
    parts = name.split(".")
    if any(not part for part in parts):
        raise StatementError(f"Invalid identifier: {name!r}")
    return ".".join('"' + part.replace('"', '""') + '"' for part in parts)


def _column(name: str) -> str:
    # Column names may legitimately contain dots, so never split them.
    if not name:
        raise StatementError("Column name must not be empty")
    return '"' + name.replace('"', '""') + '"'


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


def insert(table: str, body: Mapping[str, Any]) -> Statement:
    """``INSERT … RETURNING *`` with one placeholder per body key."""
    target = quote_ident(table)
    if not body:
        return Statement(f"INSERT INTO {target} DEFAULT VALUES RETURNING *")

    columns = ", ".join(_column(key) for key in body)
    placeholders = ", ".join("?" for _ in body)
    return Statement(
        f"INSERT INTO {target} ({columns}) VALUES ({placeholders}) RETURNING *",
        tuple(body.values()),
    )


def select_by_id(table: str, id_field: str, ident: Any) -> Statement:
    return Statement(
        f"SELECT * FROM {quote_ident(table)} WHERE {_column(id_field)} = ?",
        (ident,),
    )


def update_by_id(
    table: str, id_field: str, ident: Any, body: Mapping[str, Any]
) -> Statement:
    """``UPDATE … SET`` every body key; the identifier binds last."""
    fields = {key: value for key, value in body.items() if key != id_field}
    if not fields:
        raise StatementError(f"Nothing to update on {table!r}: the body is empty")

    assignments = ", ".join(f"{_column(key)} = ?" for key in fields)
    return Statement(
        f"UPDATE {quote_ident(table)} SET {assignments} "
        f"WHERE {_column(id_field)} = ? RETURNING *",
        (*fields.values(), ident),
    )


def delete_by_id(table: str, id_field: str, ident: Any) -> Statement:
    return Statement(
        f"DELETE FROM {quote_ident(table)} WHERE {_column(id_field)} = ?",
        (ident,),
    )


# ---------------------------------------------------------------------------
# Array columns
# ---------------------------------------------------------------------------


def array_append(
    table: str, id_field: str, target: Any, column: str, value: Any
) -> Statement:
    """Append *value* to an array column unless it is already present.

    The value is bound twice, once for ``array_append`` and once for the
    ``<> ALL`` guard, so an existing value matches no row.
    """
    col = _column(column)
    return Statement(
        f"UPDATE {quote_ident(table)} SET {col} = array_append({col}, ?) "
        f"WHERE {_column(id_field)} = ? AND ? <> ALL({col}) RETURNING *",
        (value, target, value),
    )


def array_remove(
    table: str, id_field: str, target: Any, column: str, value: Any
) -> Statement:
    """Remove every occurrence of *value* from an array column."""
    col = _column(column)
    return Statement(
        f"UPDATE {quote_ident(table)} SET {col} = array_remove({col}, ?) "
        f"WHERE {_column(id_field)} = ? RETURNING *",
        (value, target),
    )

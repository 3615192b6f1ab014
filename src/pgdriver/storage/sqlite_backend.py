# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite implementation of the abstract :class:`DatabaseBackend`.

Wraps an :mod:`aiosqlite` connection.  Useful for local runs and tests;
SQLite has no array columns, so only JSON array mode works here.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

import aiosqlite

from pgdriver.core.exceptions import StorageError
from pgdriver.storage.backend import DatabaseBackend


class SQLiteBackend(DatabaseBackend):
    """Async SQLite backend backed by an :class:`aiosqlite.Connection`."""

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._conn = connection

    @classmethod
    async def open(cls, db_path: Path | str) -> SQLiteBackend:
        """Connect to *db_path* (``":memory:"`` works) with dict-able rows."""
        try:
            conn = await aiosqlite.connect(str(db_path))
        except (OSError, sqlite3.Error) as exc:
            msg = f"Failed to open SQLite database at {db_path}: {exc}"
            raise StorageError(msg) from exc
        conn.row_factory = aiosqlite.Row
        return cls(conn)

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    async def execute(self, query: str, params: tuple[Any, ...] | None = None) -> Any:
        try:
            if params:
                return await self._conn.execute(query, params)
            return await self._conn.execute(query)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    async def fetch_one(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        rows = await self.fetch_all(query, params)
        return rows[0] if rows else None

    async def fetch_all(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        cursor = await self.execute(query, params)
        try:
            rows = await cursor.fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            await cursor.close()
        return [dict(r) for r in rows]

    # ------------------------------------------------------------------
    # Transaction / connection lifecycle
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        await self._conn.commit()

    async def close(self) -> None:
        await self._conn.close()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def backend_name(self) -> str:
        return "sqlite"

    @property
    def raw_connection(self) -> aiosqlite.Connection:
        """Return the underlying :class:`aiosqlite.Connection`."""
        return self._conn

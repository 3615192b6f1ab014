# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""The model driver: CRUD and array mutations over a :class:`DatabaseBackend`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pgdriver.core.constants import DEFAULT_ID_FIELD, ArrayMode, SaveMode
from pgdriver.core.exceptions import (
    ConfigurationError,
    MissingIdentifierError,
    UnsupportedOperationError,
    ValidationError,
)
from pgdriver.storage import statements
from pgdriver.storage.marshal import prepare
from pgdriver.storage.statements import Statement, table_name

if TYPE_CHECKING:
    from pgdriver.core.config import Settings
    from pgdriver.model import Model
    from pgdriver.storage.backend import DatabaseBackend

logger = logging.getLogger("pgdriver.driver")


class PostgresDriver:
    """Turn model objects into SQL, run it, and map rows back.

    Parameters:
        backend: Where statements are executed.
        id_field: Default identifier column (``id`` or ``_id``).
        array_mode: How list values are sent (native array or JSON text).
        save_mode: ``create`` always inserts; ``upsert`` updates identified items.
    """

    def __init__(
        self,
        backend: DatabaseBackend,
        *,
        id_field: str = DEFAULT_ID_FIELD,
        array_mode: ArrayMode = ArrayMode.NATIVE,
        save_mode: SaveMode = SaveMode.CREATE,
    ) -> None:
        if array_mode == ArrayMode.NATIVE and not backend.supports_arrays:
            msg = (
                f"The {backend.backend_name} backend has no native arrays; "
                "use array_mode='json'."
            )
            raise ConfigurationError(msg)
        self.backend = backend
        self.id_field = id_field
        self.array_mode = ArrayMode(array_mode)
        self.save_mode = SaveMode(save_mode)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(
        self, sql: str, params: list[Any] | tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Run a custom query and return its rows.

        Placeholders may be ``?`` or, on PostgreSQL, ``$N``.  The query may
        write, so it is committed like any other statement.
        """
        values = prepare(params or (), self.array_mode)
        logger.debug("execute: %s", sql)
        rows = await self.backend.fetch_all(sql, values or None)
        await self.backend.commit()
        return rows

    async def _run(self, statement: Statement, *, write: bool = True) -> list[dict[str, Any]]:
        logger.debug("statement: %s", statement.sql)
        rows = await self.backend.fetch_all(
            statement.sql, prepare(statement.params, self.array_mode)
        )
        if write:
            await self.backend.commit()
        return rows

    def _table(self, item: Model) -> str:
        return table_name(item.params)

    def _require_id(self, item: Model, action: str) -> Any:
        ident = item.id
        if ident is None:
            raise MissingIdentifierError(
                f"Cannot {action} an item without an '{item.id_field}'"
            )
        return ident

    def _require_arrays(self) -> None:
        if not self.backend.supports_arrays:
            raise UnsupportedOperationError(
                f"Array operations are not supported by the {self.backend.backend_name} backend"
            )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def save(self, item: Model) -> Model:
        """Validate *item*, then insert it (or update it in ``upsert`` mode)."""
        result = item.validate()
        if result.error is not None:
            raise ValidationError(result.error)

        if self.save_mode == SaveMode.UPSERT and item.id is not None:
            updated = await self.update(item)
            if updated is not None:
                return updated
            # The identifier matched nothing: the row is new.
        return await self.create(item)

    async def create(self, item: Model) -> Model:
        """Insert the item's body and replace its data with the stored row."""
        values = item.body()
        if item.id is not None:
            values = {item.id_field: item.id, **values}
        rows = await self._run(statements.insert(self._table(item), values))
        item.data = rows[0]
        return item

    async def read(self, item: Model) -> Model | None:
        """Load the row matching the item's identifier, or return ``None``."""
        ident = self._require_id(item, "read")
        rows = await self._run(
            statements.select_by_id(self._table(item), item.id_field, ident),
            write=False,
        )
        if not rows:
            return None
        item.body(rows[0])
        return item

    async def update(self, item: Model) -> Model | None:
        """Write every body field to the identified row.

        Returns ``None`` when no row carries the identifier.
        """
        ident = self._require_id(item, "update")
        rows = await self._run(
            statements.update_by_id(self._table(item), item.id_field, ident, item.body())
        )
        if not rows:
            return None
        item.body(rows[0])
        return item

    async def delete(self, item: Model) -> bool:
        ident = self._require_id(item, "delete")
        await self._run(statements.delete_by_id(self._table(item), item.id_field, ident))
        return True

    # ------------------------------------------------------------------
    # Array columns
    # ------------------------------------------------------------------

    async def array_append(self, item: Model, target: Any, column: str, value: Any) -> Model:
        """Append *value* to *column* of row *target* unless already present.

        The stored row replaces the item's data; when nothing changed the item
        is returned untouched.
        """
        self._require_arrays()
        rows = await self._run(
            statements.array_append(self._table(item), item.id_field, target, column, value)
        )
        if rows:
            item.body(rows[0])
        return item

    async def array_remove(self, item: Model, target: Any, column: str, value: Any) -> Model:
        """Remove *value* from *column* of row *target*."""
        self._require_arrays()
        rows = await self._run(
            statements.array_remove(self._table(item), item.id_field, target, column, value)
        )
        if rows:
            item.body(rows[0])
        return item


async def create_driver(settings: Settings | None = None) -> PostgresDriver:
    """Open the configured backend and wrap it in a :class:`PostgresDriver`."""
    from pgdriver.core.config import get_settings
    from pgdriver.storage.database import open_backend

    settings = settings or get_settings()
    backend = await open_backend(settings)
    try:
        return PostgresDriver(
            backend,
            id_field=settings.id_field,
            array_mode=settings.array_mode,
            save_mode=settings.save_mode,
        )
    except ConfigurationError:
        await backend.close()
        raise

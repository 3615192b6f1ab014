# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Process-wide backend management.

The active backend is chosen by ``Settings.db_backend`` (``PGDRIVER_DB_BACKEND``).
"""

from __future__ import annotations

import logging

from pgdriver.core.config import Settings, get_settings
from pgdriver.core.exceptions import ConfigurationError, StorageError
from pgdriver.storage.backend import DatabaseBackend

logger = logging.getLogger("pgdriver.storage.database")

_backend: DatabaseBackend | None = None


async def open_backend(settings: Settings) -> DatabaseBackend:
    """Build a new :class:`DatabaseBackend` from *settings*.

    Raises:
        ConfigurationError: Unknown backend, or ``postgres`` chosen without a
            ``postgresql`` section.
        StorageError: The connection could not be established.
    """
    chosen = settings.db_backend

    if chosen == "postgres":
        pg_settings = settings.postgresql
        if pg_settings is None:
            logger.error("Can not init postgresql, no valid config")
            msg = (
                "PostgreSQL backend selected but no valid 'postgresql' config. "
                "Set PGDRIVER_POSTGRESQL__DSN or the PGDRIVER_POSTGRESQL__* fields."
            )
            raise ConfigurationError(msg)

        from pgdriver.storage.postgres import PostgresDatabase

        return await PostgresDatabase.create(
            pg_settings.to_dsn(),
            min_size=pg_settings.min,
            max_size=pg_settings.max,
            idle_timeout=pg_settings.idle_timeout,
        )

    if chosen == "sqlite":
        from pgdriver.storage.sqlite_backend import SQLiteBackend

        return await SQLiteBackend.open(settings.db_path)

    msg = f"Unknown database backend: {chosen!r}. Expected 'postgres' or 'sqlite'."
    raise ConfigurationError(msg)


async def init_backend(settings: Settings | None = None) -> DatabaseBackend:
    """Initialise and return the shared :class:`DatabaseBackend`.

    Later calls return the same instance until :func:`close_backend`.
    """
    global _backend

    if _backend is not None:
        return _backend

    _backend = await open_backend(settings or get_settings())
    logger.info("Initialized %s backend", _backend.backend_name)
    return _backend


async def get_backend() -> DatabaseBackend:
    """Get the active :class:`DatabaseBackend`.

    Raises :class:`StorageError` if no backend has been initialised.
    """
    if _backend is None:
        raise StorageError("Database backend not initialized. Call init_backend() first.")
    return _backend


async def close_backend() -> None:
    """Close the shared backend, if any."""
    global _backend

    if _backend is not None:
        await _backend.close()
        _backend = None

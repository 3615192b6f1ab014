# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations and defaults shared across the driver."""

from enum import StrEnum


class ArrayMode(StrEnum):
    """How list values are sent to the server."""

    NATIVE = "native"  # PostgreSQL array
    JSON = "json"  # JSON text, for json/jsonb columns


class SaveMode(StrEnum):
    """What ``save`` does with an item that already has an identifier."""

    CREATE = "create"  # always INSERT
    UPSERT = "upsert"  # UPDATE when identified, INSERT otherwise


class Dialect(StrEnum):
    SQLITE = "sqlite"
    POSTGRES = "postgres"


DEFAULT_ID_FIELD = "id"
TABLE_SUFFIX = "s"

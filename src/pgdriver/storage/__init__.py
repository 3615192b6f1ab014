# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- execution backends, statement builders, and marshalling."""

from pgdriver.storage.backend import DatabaseBackend
from pgdriver.storage.database import close_backend, get_backend, init_backend
from pgdriver.storage.query_adapter import adapt_query
from pgdriver.storage.statements import Statement, quote_ident, table_name

__all__ = [
    "DatabaseBackend",
    "Statement",
    "adapt_query",
    "close_backend",
    "get_backend",
    "init_backend",
    "quote_ident",
    "table_name",
]

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Placeholder rewriting between SQL dialects.

Statements are built with ``?`` markers.  SQLite takes them as-is while
asyncpg wants ``$1, $2, …``.  :func:`adapt_query` rewrites a query into the
target dialect.
"""

from __future__ import annotations

import re

from pgdriver.core.constants import Dialect


def adapt_query(query: str, dialect: str) -> str:
    """Rewrite ``?`` parameter placeholders for the target *dialect*.

    Args:
        query: SQL query with ``?`` positional placeholders.
        dialect: ``"sqlite"`` (no-op) or ``"postgres"`` (``$N``).

    Returns:
        The rewritten query string.

    Raises:
        ValueError: If *dialect* is not recognised.
    """
    if dialect == Dialect.SQLITE:
        return query

    if dialect == Dialect.POSTGRES:
        return _question_to_dollar(query)

    msg = f"Unknown SQL dialect: {dialect!r}. Expected 'sqlite' or 'postgres'."
    raise ValueError(msg)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _question_to_dollar(query: str) -> str:
    """Replace each ``?`` outside quoted text with ``$N``.

    Single-quoted literals and double-quoted identifiers are copied
    verbatim, including doubled quotes (``''`` / ``""``) inside them.
    """
    result: list[str] = []
    counter = 0
    quote: str | None = None

    i = 0
    while i < len(query):
        ch = query[i]

        if quote is None and ch in ("'", '"'):
            quote = ch
            result.append(ch)
        elif quote is not None and ch == quote:
            if i + 1 < len(query) and query[i + 1] == quote:
                result.append(ch * 2)
                i += 2
                continue
            quote = None
            result.append(ch)
        elif ch == "?" and quote is None:
            counter += 1
            result.append(f"${counter}")
        else:
            result.append(ch)

        i += 1

    return "".join(result)


_NAMED_PARAM = re.compile(r"""'(?:[^']|'')*'|"(?:[^"]|"")*"|(?<!:):(\w+)""")


def adapt_named_to_positional(query: str, params: dict[str, object], dialect: str) -> tuple[str, tuple[object, ...]]:
    """Convert a ``:name`` style query + dict params to positional ``?``/``$N``.

    A name used twice is bound twice.  ``::type`` casts and anything inside
    quoted literals or identifiers are left alone.

    Returns:
        A tuple of (rewritten_query, positional_params_tuple).
    """
    positional: list[object] = []
    counter = 0

    def _replacer(match: re.Match[str]) -> str:
        nonlocal counter
        name = match.group(1)
        if name is None:
            return match.group(0)
        positional.append(params[name])
        counter += 1
        if dialect == Dialect.POSTGRES:
            return f"${counter}"
        return "?"

    rewritten = _NAMED_PARAM.sub(_replacer, query)
    return rewritten, tuple(positional)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Value marshalling between Python objects and column wire formats."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pgdriver.core.constants import ArrayMode


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def prepare_value(value: Any, array_mode: ArrayMode = ArrayMode.NATIVE) -> Any:
    """Return *value* in the form the server expects for its column.

    Mappings always become JSON text.  Lists and tuples stay Python lists in
    ``native`` mode and become JSON text in ``json`` mode.  Scalars pass
    through untouched.

    A native list is encoded by the column's own codec: a PostgreSQL array
    element by element, or a whole json/jsonb value through
    :func:`encode_json_param`.  Mappings inside it therefore stay Python
    objects so they are encoded exactly once.
    """
    if isinstance(value, dict):
        return encode_json(value)
    if isinstance(value, (list, tuple)):
        if array_mode == ArrayMode.JSON:
            return encode_json(value)
        return _as_list(value)
    return value


def _as_list(value: list[Any] | tuple[Any, ...]) -> list[Any]:
    # Nested lists are multi-dimensional arrays.
    return [_as_list(v) if isinstance(v, (list, tuple)) else v for v in value]


def prepare(values: Iterable[Any], array_mode: ArrayMode = ArrayMode.NATIVE) -> tuple[Any, ...]:
    """Apply :func:`prepare_value` to every bind parameter."""
    return tuple(prepare_value(v, array_mode) for v in values)


def decode_json(value: str | bytes) -> Any:
    return json.loads(value)


def encode_json_param(value: Any) -> str:
    """Encoder for json/jsonb codecs: pre-encoded text passes through."""
    if isinstance(value, str):
        return value
    return encode_json(value)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import BaseModel

from pgdriver.model import Model, ModelParams


class UserSchema(BaseModel):
    firstname: str | None = None
    lastname: str | None = None
    favorites: Any = None
    order: Any = None
    preferences: list[Any] = []


class User(Model):
    params = ModelParams(type="user")
    schema = UserSchema


class Account(Model):
    params = ModelParams(table="accounts", id_field="_id")


@pytest.fixture
def user_cls() -> type[User]:
    # Fresh subclass so bind() never leaks between tests
    return type("User", (User,), {})


@pytest.fixture
def account_cls() -> type[Account]:
    return type("Account", (Account,), {})


def make_mock_pool(conn: AsyncMock) -> MagicMock:
    """Build a MagicMock pool whose ``acquire()`` yields *conn*."""
    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    return pool


@pytest.fixture
def mock_conn() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_pool(mock_conn: AsyncMock) -> MagicMock:
    return make_mock_pool(mock_conn)


@pytest.fixture
def mock_backend() -> AsyncMock:
    """A DatabaseBackend stand-in that records statements."""
    backend = AsyncMock()
    backend.backend_name = "postgres"
    backend.supports_arrays = True
    backend.fetch_all.return_value = []
    return backend


@pytest.fixture(autouse=True)
def _reset_backend():
    """Drop the shared backend singleton between tests."""
    import pgdriver.storage.database as db_mod

    db_mod._backend = None
    yield
    db_mod._backend = None


@pytest.fixture(autouse=True)
def _reset_logging():
    """Remove handlers installed by the CLI callback."""
    import logging

    yield
    root = logging.getLogger("pgdriver")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Live driver tests against a real PostgreSQL server.

These tests require ``PGDRIVER_TEST_DSN`` to be set in the environment.
They are skipped automatically when it is absent.

Run with::

    PGDRIVER_TEST_DSN=postgresql://postgres@localhost/postgres pytest tests/live -xvs
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from pydantic import BaseModel

from pgdriver.core.constants import ArrayMode
from pgdriver.driver import PostgresDriver
from pgdriver.model import Model, ModelParams
from pgdriver.storage.postgres import PostgresDatabase

TEST_DSN = os.environ.get("PGDRIVER_TEST_DSN", "")
pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(not TEST_DSN, reason="PGDRIVER_TEST_DSN not set, skipping live PostgreSQL tests"),
]

_TABLE = "pgdriver_live_users"

_SCHEMA = f"""
CREATE TABLE {_TABLE} (
    id          BIGSERIAL PRIMARY KEY,
    firstname   VARCHAR(64),
    lastname    VARCHAR(64),
    favorites   JSONB,
    "order"     INTEGER,
    preferences INTEGER[],
    tags        TEXT[] NOT NULL DEFAULT '{{}}'
)
"""


class UserSchema(BaseModel):
    firstname: str | None = None
    lastname: str | None = None
    favorites: Any = None
    order: Any = None
    preferences: list[int] = []
    tags: list[str] = []


class User(Model):
    params = ModelParams(table=_TABLE)
    schema = UserSchema


@pytest.fixture
async def driver():
    db = await PostgresDatabase.create(TEST_DSN, min_size=1, max_size=5)
    await db.execute(f"DROP TABLE IF EXISTS {_TABLE}")
    await db.execute(_SCHEMA)
    yield PostgresDriver(db, array_mode=ArrayMode.NATIVE)
    await db.execute(f"DROP TABLE IF EXISTS {_TABLE}")
    await db.close()


async def _save(driver: PostgresDriver, **fields: Any) -> User:
    return await User(fields, driver=driver).save()


class TestLiveCrud:
    favorites = {"a": [1, 34, {"a": 2}]}

    async def test_save_and_read(self, driver: PostgresDriver) -> None:
        user = await _save(
            driver, firstname="toto", lastname="robert",
            favorites=self.favorites, order=1, preferences=[1, 2, 3],
        )
        assert user.id is not None
        assert user.data["favorites"] == self.favorites
        assert user.data["preferences"] == [1, 2, 3]

        existing = await User({"id": user.id}, driver=driver).read()
        assert existing is not None
        assert existing.data == user.data

    async def test_update(self, driver: PostgresDriver) -> None:
        user = await _save(driver, firstname="toto", favorites=self.favorites, order=1, preferences=[1, 2, 3])
        favorites = [{"a": 1, "b": 2, "c": {"a": 2}}, {"d": "4", "e": 4}]

        updated = await User(
            {"id": user.id, "firstname": "toto2", "lastname": "robert2", "favorites": favorites},
            driver=driver,
        ).update()
        assert updated is not None
        assert updated.data["firstname"] == "toto2"
        assert updated.data["favorites"] == favorites
        assert updated.data["order"] == 1
        assert updated.data["preferences"] == [1, 2, 3]

    async def test_delete(self, driver: PostgresDriver) -> None:
        user = await _save(driver, firstname="toto")
        assert await User({"id": user.id}, driver=driver).delete() is True
        assert await User({"id": user.id}, driver=driver).read() is None


class TestLiveArrays:
    async def test_append_is_unique(self, driver: PostgresDriver) -> None:
        user = await _save(driver, firstname="toto")
        await user.array_append("tags", "blue")
        await user.array_append("tags", "blue")
        await user.array_append("tags", "green")
        assert user.data["tags"] == ["blue", "green"]

    async def test_remove(self, driver: PostgresDriver) -> None:
        user = await _save(driver, firstname="toto", tags=["blue", "green", "blue"])
        await user.array_remove("tags", "blue")
        assert user.data["tags"] == ["green"]

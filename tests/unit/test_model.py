# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for model objects: body access, identifiers, validation, delegation."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from pgdriver.core.exceptions import ConfigurationError
from pgdriver.model import Model, ModelParams


class TestBody:
    def test_body_excludes_identifier(self, user_cls) -> None:
        user = user_cls({"id": 1, "firstname": "toto"})
        assert user.body() == {"firstname": "toto"}

    def test_body_setter_replaces_data(self, user_cls) -> None:
        user = user_cls({"firstname": "toto"})
        body = user.body({"id": 9, "firstname": "toto2", "order": 1})
        assert user.data == {"id": 9, "firstname": "toto2", "order": 1}
        assert body == {"firstname": "toto2", "order": 1}

    def test_data_is_copied(self, user_cls) -> None:
        source = {"firstname": "toto"}
        user = user_cls(source)
        user.data["lastname"] = "robert"
        assert source == {"firstname": "toto"}


class TestIdentifier:
    def test_default_id_field(self, user_cls) -> None:
        assert user_cls({"id": 4}).id == 4

    def test_missing_id_is_none(self, user_cls) -> None:
        assert user_cls({"firstname": "toto"}).id is None

    def test_params_id_field(self, account_cls) -> None:
        account = account_cls({"_id": "a-1", "id": "not-this"})
        assert account.id_field == "_id"
        assert account.id == "a-1"
        assert account.body() == {"id": "not-this"}

    def test_driver_id_field(self, user_cls) -> None:
        driver = MagicMock()
        driver.id_field = "_id"
        user = user_cls({"_id": "u-1"}, driver=driver)
        assert user.id == "u-1"

    def test_params_override_driver(self, account_cls) -> None:
        driver = MagicMock()
        driver.id_field = "id"
        assert account_cls({}, driver=driver).id_field == "_id"


class TestValidation:
    def test_valid_item(self, user_cls) -> None:
        user = user_cls({"firstname": "toto", "preferences": [1, 2, 3]})
        assert user.valid()
        result = user.validate()
        assert result.error is None
        assert result.value == {"firstname": "toto", "preferences": [1, 2, 3]}

    def test_unset_fields_not_filled(self, user_cls) -> None:
        assert user_cls({"lastname": "robert"}).validate().value == {"lastname": "robert"}

    def test_invalid_item(self, user_cls) -> None:
        user = user_cls({"preferences": "not-a-list"})
        assert not user.valid()
        assert "preferences" in user.validate().error

    def test_no_schema_always_valid(self, account_cls) -> None:
        account = account_cls({"anything": object()})
        assert account.valid()


class TestDelegation:
    async def test_unbound_raises(self) -> None:
        class Orphan(Model):
            params = ModelParams(type="orphan")

        with pytest.raises(ConfigurationError, match="Orphan.bind"):
            await Orphan({}).save()

    async def test_bind_sets_class_default(self, user_cls) -> None:
        driver = AsyncMock()
        user_cls.bind(driver)
        user = user_cls({"firstname": "toto"})
        await user.save()
        driver.save.assert_awaited_once_with(user)

    async def test_instance_driver_overrides(self, user_cls) -> None:
        class_driver, own_driver = AsyncMock(), AsyncMock()
        user_cls.bind(class_driver)
        user = user_cls({"id": 1}, driver=own_driver)
        await user.read()
        own_driver.read.assert_awaited_once_with(user)
        class_driver.read.assert_not_awaited()

    async def test_crud_delegation(self, user_cls) -> None:
        driver = AsyncMock()
        driver.id_field = "id"
        user = user_cls({"id": 1, "firstname": "toto"}, driver=driver)
        await user.create()
        await user.update()
        await user.delete()
        driver.create.assert_awaited_once_with(user)
        driver.update.assert_awaited_once_with(user)
        driver.delete.assert_awaited_once_with(user)

    async def test_array_ops_default_target_is_own_id(self, user_cls) -> None:
        driver = AsyncMock()
        driver.id_field = "id"
        user = user_cls({"id": 3}, driver=driver)
        await user.array_append("preferences", 4)
        await user.array_remove("preferences", 1, target=8)
        driver.array_append.assert_awaited_once_with(user, 3, "preferences", 4)
        driver.array_remove.assert_awaited_once_with(user, 8, "preferences", 1)


def test_repr(user_cls) -> None:
    assert repr(user_cls({"id": 1})) == "User({'id': 1})"

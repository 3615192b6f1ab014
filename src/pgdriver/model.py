# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Model objects mapped onto table rows.

A model subclass names its table through :class:`ModelParams` and may attach
a pydantic schema used for validation before writes::

    class UserSchema(BaseModel):
        firstname: str | None = None
        preferences: list[int] = []

    class User(Model):
        params = ModelParams(type="user")   # table "users"
        schema = UserSchema

    User.bind(driver)
    user = await User({"firstname": "toto"}).save()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pgdriver.core.constants import DEFAULT_ID_FIELD
from pgdriver.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from pgdriver.driver import PostgresDriver


class ModelParams(BaseModel):
    """Table metadata for a model class."""

    type: str | None = None
    table: str | None = None
    id_field: str | None = None


@dataclass
class ValidationResult:
    value: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


class Model:
    """Base class for driver-backed models."""

    params: ClassVar[ModelParams] = ModelParams()
    schema: ClassVar[type[BaseModel] | None] = None
    driver: PostgresDriver | None = None

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        *,
        driver: PostgresDriver | None = None,
    ) -> None:
        self.data: dict[str, Any] = dict(data or {})
        if driver is not None:
            self.driver = driver

    @classmethod
    def bind(cls, driver: PostgresDriver) -> None:
        """Make *driver* the default for every instance of this class."""
        cls.driver = driver

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def id_field(self) -> str:
        if self.params.id_field:
            return self.params.id_field
        if self.driver is not None:
            return self.driver.id_field
        return DEFAULT_ID_FIELD

    @property
    def id(self) -> Any:
        return self.data.get(self.id_field)

    def body(self, row: dict[str, Any] | None = None) -> dict[str, Any]:
        """Return the writable fields, or replace the data with *row* first.

        The identifier is never part of the body.
        """
        if row is not None:
            self.data = dict(row)
        return {k: v for k, v in self.data.items() if k != self.id_field}

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> ValidationResult:
        body = self.body()
        if self.schema is None:
            return ValidationResult(value=body)
        try:
            parsed = self.schema.model_validate(body)
        except PydanticValidationError as exc:
            return ValidationResult(value=body, error=str(exc))
        return ValidationResult(value=parsed.model_dump(exclude_unset=True))

    def valid(self) -> bool:
        return self.validate().error is None

    # ------------------------------------------------------------------
    # Persistence, delegated to the bound driver
    # ------------------------------------------------------------------

    def _driver(self) -> PostgresDriver:
        if self.driver is None:
            msg = f"No driver bound to {type(self).__name__}. Call {type(self).__name__}.bind(driver) first."
            raise ConfigurationError(msg)
        return self.driver

    async def save(self) -> Model:
        return await self._driver().save(self)

    async def create(self) -> Model:
        return await self._driver().create(self)

    async def read(self) -> Model | None:
        return await self._driver().read(self)

    async def update(self) -> Model | None:
        return await self._driver().update(self)

    async def delete(self) -> bool:
        return await self._driver().delete(self)

    async def array_append(self, column: str, value: Any, target: Any = None) -> Model:
        """Append *value* to *column* on row *target* (default: this item)."""
        return await self._driver().array_append(
            self, self.id if target is None else target, column, value
        )

    async def array_remove(self, column: str, value: Any, target: Any = None) -> Model:
        """Remove *value* from *column* on row *target* (default: this item)."""
        return await self._driver().array_remove(
            self, self.id if target is None else target, column, value
        )

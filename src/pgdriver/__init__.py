# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""pgdriver - Model-to-SQL driver for PostgreSQL."""

__version__ = "0.3.1"

from pgdriver.driver import PostgresDriver, create_driver
from pgdriver.model import Model, ModelParams, ValidationResult

__all__ = [
    "Model",
    "ModelParams",
    "PostgresDriver",
    "ValidationResult",
    "__version__",
    "create_driver",
]

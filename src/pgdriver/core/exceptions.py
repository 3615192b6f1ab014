# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for pgdriver."""


class PgDriverError(Exception):
    """Base exception for all pgdriver errors."""


class ConfigurationError(PgDriverError):
    """Invalid or missing configuration."""


class StorageError(PgDriverError):
    """Database or storage operation failed."""


class StatementError(PgDriverError):
    """A SQL statement could not be built from the given input."""


class ValidationError(PgDriverError):
    """A model failed validation before being written."""


class MissingIdentifierError(PgDriverError):
    """An operation that targets a single row was given no identifier."""


class UnsupportedOperationError(PgDriverError):
    """The active backend cannot perform the requested operation."""

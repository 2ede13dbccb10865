"""the error taxonomy of typea

configuration, deserialization and duplicate key errors are fatal and raised
immediately. validation errors are data: predicates may raise them, but they
never escape ``validate``.
"""
from . import utils

globals().update(
    {x: getattr(utils.testing, x) for x in dir(utils.testing) if x.startswith("assert")}
)

__all__ = (
    "ConfigurationError",
    "DeserializationError",
    "DuplicateKeyError",
    "ValidationError",
)


class ConfigurationError(TypeError):
    """a schema was declared with a malformed field"""


class DeserializationError(ValueError):
    """a raw value could not be converted into its in-memory form"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

    def __str__(self):
        message = super().__str__()
        if self.field is not None:
            return f"{self.field}: {message}"
        return message


class DuplicateKeyError(ValueError):
    """two mapping keys collide after string coercion"""

    def __init__(self, key):
        super().__init__(f"Duplicate key after stringification: {key}")
        self.key = key


class ValidationError(AssertionError):
    """a field scoped validation failure.

    predicates may raise this (or any ``AssertionError``) instead of returning a
    message; the composer catches it and records its text."""

"""Error taxonomy for capsule containers.

Every failure is raised synchronously to the caller of the triggering
operation. Nothing here is caught or retried inside the library.

Each error also subclasses the builtin exception a Python caller would
expect for the same situation, so ``getattr(c, name, default)`` and
``except TypeError`` keep working.
"""

from __future__ import annotations

import reprlib
import typing
from typing import Any


class CapsuleError(Exception):
    """Base class for all capsule errors."""


class ShapeViolation(CapsuleError, AttributeError):
    """An operation targeted a property name outside the declared schema."""

    def __init__(self, name: str, operation: str = "access", reason: str | None = None) -> None:
        msg = (
            f"Cannot {operation} property {name!r}: "
            f"{reason or 'not declared in the capsule schema'}"
        )
        # AttributeError.__init__ resets ``name``; assign after it.
        super().__init__(msg)
        self.name = name
        self.operation = operation


class TypeMismatch(CapsuleError, TypeError):
    """A write was rejected by the property's validator.

    Attributes:
        name: Property being written.
        declared_type: Type token declared for the property.
        value: The rejected value.
        actual_kind: Type name of the rejected value.
    """

    def __init__(self, name: str, declared_type: Any, value: Any) -> None:
        self.name = name
        self.declared_type = declared_type
        self.value = value
        self.actual_kind = type(value).__name__
        msg = (
            f"Trying to set property {name!r} of type {describe_token(declared_type)} "
            f"to a value of type {self.actual_kind}: {describe_value(value)}"
        )
        super().__init__(msg)


class SchemaDefect(CapsuleError, ValueError):
    """The declared schema is inconsistent. Raised at construction only."""

    def __init__(self, msg: str, *, name: str | None = None) -> None:
        super().__init__(msg)
        self.name = name


class ConfigError(CapsuleError, ValueError):
    """Configuration file could not be parsed."""


def describe_token(token: Any) -> str:
    """Human-readable name for a type token, used in error messages."""
    if token is None:
        return "any"
    if isinstance(token, type) and typing.get_origin(token) is None:
        return token.__name__
    return str(token)


def describe_value(value: Any) -> str:
    """Abbreviated repr of *value* for error messages.

    Never raises: a failing ``__repr__`` must not mask the error being built.
    """
    try:
        return reprlib.repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"

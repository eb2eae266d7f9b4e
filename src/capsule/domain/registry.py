"""Type token registry.

Maps hashable type tokens to validators. The built-in kinds and their
builtin aliases are registered up front and are reserved; plugins may
add new tokens through :meth:`TypeRegistry.register` but never replace
a built-in one.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Any

from capsule.domain.kinds import BUILTIN_ALIASES, Kind
from capsule.domain.validators import (
    Validator,
    accept_any,
    is_array,
    is_boolean,
    is_integer,
    is_number,
    is_object,
    is_string,
)

BUILTIN_VALIDATORS: dict[Kind, Validator] = {
    Kind.STRING: is_string,
    Kind.NUMBER: is_number,
    Kind.INTEGER: is_integer,
    Kind.BOOLEAN: is_boolean,
    Kind.ARRAY: is_array,
    Kind.OBJECT: is_object,
    Kind.ANY: accept_any,
}


class TypeRegistry:
    """Lookup table from type token to validator."""

    def __init__(self) -> None:
        self._validators: dict[Any, Validator] = {}
        self._builtin: set[Any] = set()

    @classmethod
    def builtin(cls) -> TypeRegistry:
        """Registry holding only the built-in kinds and aliases."""
        registry = cls()
        for kind, validator in BUILTIN_VALIDATORS.items():
            registry._validators[kind] = validator
            registry._builtin.add(kind)
        for alias, kind in BUILTIN_ALIASES.items():
            registry._validators[alias] = BUILTIN_VALIDATORS[kind]
            registry._builtin.add(alias)
        return registry

    def register(self, token: Any, validator: Validator) -> None:
        """Register *validator* for *token*.

        Re-registering a custom token replaces the previous validator.
        Built-in tokens are reserved.
        """
        if not callable(validator):
            msg = f"Validator for {token!r} must be callable, got {type(validator).__name__}"
            raise TypeError(msg)

        if not _is_hashable(token):
            msg = f"Type token {token!r} is not hashable and cannot be registered"
            raise TypeError(msg)

        if token in self._builtin:
            msg = f"Type token {token!r} conflicts with a built-in registration"
            raise ValueError(msg)

        self._validators[token] = validator

    def unregister(self, token: Any) -> None:
        """Remove a custom token. Built-in tokens cannot be removed."""
        if token in self._builtin:
            msg = f"Type token {token!r} is built-in and cannot be removed"
            raise ValueError(msg)
        self._validators.pop(token, None)

    def lookup(self, token: Any) -> Validator | None:
        """Return the validator for *token*, or None if it is not registered."""
        if not _is_hashable(token):
            return None
        return self._validators.get(token)

    def is_builtin(self, token: Any) -> bool:
        return _is_hashable(token) and token in self._builtin

    def __contains__(self, token: object) -> bool:
        return self.lookup(token) is not None

    def __iter__(self) -> Iterator[Any]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)


def _is_hashable(token: Any) -> bool:
    if not isinstance(token, Hashable):
        return False
    try:
        hash(token)
    except TypeError:
        return False
    return True


TYPE_REGISTRY: TypeRegistry = TypeRegistry.builtin()

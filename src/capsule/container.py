"""Capsule — a shape-frozen, type-checked, observable property container.

Properties are declared once at construction. Afterwards:

- ``capsule.name = value`` runs the cached validator for ``name`` and,
  only if it passes, commits the value and notifies subscribers.
- ``capsule.name`` returns the stored value.
- Any attempt to add, remove or subscribe to an undeclared name raises
  :class:`~capsule.errors.ShapeViolation`.

INVARIANT: A stored value always satisfies its property's validator.
INVARIANT: A rejected write changes nothing and notifies nobody.

The container does no locking. Callers sharing one instance across
threads must serialise access themselves.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any

from capsule.domain.registry import TypeRegistry
from capsule.domain.validators import Validator
from capsule.errors import (
    SchemaDefect,
    ShapeViolation,
    TypeMismatch,
    describe_token,
    describe_value,
)
from capsule.resolver import resolve
from capsule.schema import PropertySpec, normalize_schema

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any, Any], Any]


class Capsule:
    """Observable container with a fixed, typed set of properties.

    Parameters:
        schema: Ordered mapping from property name to a descriptor
            (see :mod:`capsule.schema`).
        registry: Type registry used to resolve tokens. Defaults to the
            process-wide registry.

    Raises:
        SchemaDefect: The schema is malformed or a default fails its
            own property's validator.
    """

    __slots__ = ("_specs", "_validators", "_values", "_subscribers", "_sealed")

    def __init__(
        self,
        schema: Mapping[str, Any],
        *,
        registry: TypeRegistry | None = None,
    ) -> None:
        if getattr(self, "_sealed", False):
            msg = f"{type(self).__name__} is already sealed; its schema cannot be redeclared"
            raise SchemaDefect(msg)

        reserved = frozenset(n for n in dir(type(self)) if not n.startswith("_"))
        specs = normalize_schema(schema, reserved=reserved)

        validators: dict[str, Validator] = {}
        values: dict[str, Any] = {}
        for name, spec in specs.items():
            validator = resolve(spec.type, registry=registry)
            validators[name] = validator
            if spec.has_default:
                default = spec.make_default()
                if not validator(default):
                    msg = (
                        f"Default for property {name!r} does not match its declared type "
                        f"{describe_token(spec.type)}: {describe_value(default)}"
                    )
                    raise SchemaDefect(msg, name=name)
                values[name] = default

        self._seal(specs, validators, values)
        logger.debug("Sealed capsule with properties %s", list(specs))

    # ------------------------------------------------------------------
    # Attribute interception
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. for property names.
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delattr__(self, name: str) -> None:
        if name in self._specs:
            raise ShapeViolation(name, "delete", "capsule shape is frozen")
        raise ShapeViolation(name, "delete")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """Return the current value of *name*, or None if it was never set."""
        self._require(name, "read")
        return self._values.get(name)

    def set(self, name: str, value: Any) -> None:
        """Validate and commit *value*, then notify subscribers of *name*.

        Subscribers run in registration order with ``(new_value, old_value)``.
        A subscriber exception propagates to the caller, but the value is
        already committed by then.

        Raises:
            ShapeViolation: *name* is not declared.
            TypeMismatch: *value* fails the property's validator.
        """
        validator = self._validators.get(name)
        if validator is None:
            raise ShapeViolation(name, "set")
        if not validator(value):
            logger.debug("Rejected write to %s: %s", name, type(value).__name__)
            raise TypeMismatch(name, self._specs[name].type, value)

        old_value = self._values.get(name)
        self._values[name] = value

        for callback in list(self._subscribers[name]):
            callback(value, old_value)

    def subscribe(self, name: str, callback: Subscriber) -> None:
        """Call *callback(new_value, old_value)* after every accepted write to *name*."""
        self._require(name, "subscribe to")
        if not callable(callback):
            msg = f"Subscriber for {name!r} must be callable, got {type(callback).__name__}"
            raise TypeError(msg)
        self._subscribers[name].append(callback)

    def unsubscribe(self, name: str) -> None:
        """Remove every subscriber of *name*."""
        self._require(name, "unsubscribe from")
        self._subscribers[name].clear()

    def subscriber_count(self, name: str) -> int:
        self._require(name, "inspect")
        return len(self._subscribers[name])

    def declared_type(self, name: str) -> Any:
        """Return the type token *name* was declared with."""
        self._require(name, "inspect")
        return self._specs[name].type

    def spec(self, name: str) -> PropertySpec:
        self._require(name, "inspect")
        return self._specs[name]

    def is_set(self, name: str) -> bool:
        """Whether *name* holds a value (a default or an explicit write)."""
        self._require(name, "inspect")
        return name in self._values

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of current values in declaration order."""
        return {name: self._values.get(name) for name in self._specs}

    @property
    def properties(self) -> tuple[str, ...]:
        """Declared property names in declaration order."""
        return tuple(self._specs)

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._specs))

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.to_dict().items())
        return f"{type(self).__name__}({fields})"

    def __copy__(self) -> Capsule:
        """Same schema and values; subscribers are not carried over."""
        clone = object.__new__(type(self))
        clone._seal(self._specs, self._validators, dict(self._values))
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> Capsule:
        clone = object.__new__(type(self))
        memo[id(self)] = clone
        clone._seal(self._specs, self._validators, copy.deepcopy(self._values, memo))
        return clone

    def __reduce_ex__(self, protocol: Any) -> Any:
        msg = f"{type(self).__name__} instances cannot be pickled"
        raise TypeError(msg)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _seal(
        self,
        specs: dict[str, PropertySpec],
        validators: dict[str, Validator],
        values: dict[str, Any],
    ) -> None:
        object.__setattr__(self, "_specs", specs)
        object.__setattr__(self, "_validators", validators)
        object.__setattr__(self, "_values", values)
        object.__setattr__(self, "_subscribers", {name: [] for name in specs})
        object.__setattr__(self, "_sealed", True)

    def _require(self, name: str, operation: str) -> None:
        if name not in self._specs:
            raise ShapeViolation(name, operation)

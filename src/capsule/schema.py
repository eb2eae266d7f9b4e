"""Property descriptors and schema normalisation.

A schema is an ordered mapping from property name to a descriptor. A
descriptor may be a :class:`PropertySpec`, a plain mapping with the same
keys (``type``, ``default``, ``default_factory``), or a bare type token:

    {
        "name": str,
        "phone": {"type": float},
        "is_citizen": PropertySpec(type=bool, default=True),
        "emails": PropertySpec(type=list, default_factory=list),
    }

Defaults are stored by reference. Use ``default_factory`` when every
container needs its own mutable value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ValidationError, model_validator

from capsule.errors import SchemaDefect


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET
"""Marker for "no default declared" and for properties never assigned."""


class PropertySpec(BaseModel):
    """Declaration of a single property: type token plus optional default."""

    model_config = {"frozen": True, "extra": "forbid", "arbitrary_types_allowed": True}

    type: Any = None
    default: Any = UNSET
    default_factory: Callable[[], Any] | None = None

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            msg = f"Invalid property declaration: {exc.errors()[0]['msg']}"
            raise SchemaDefect(msg) from exc

    @model_validator(mode="after")
    def check_single_default_source(self) -> PropertySpec:
        if self.default is not UNSET and self.default_factory is not None:
            msg = "Declare either default or default_factory, not both"
            raise ValueError(msg)
        return self

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET or self.default_factory is not None

    def make_default(self) -> Any:
        """Return the default value, calling the factory if one is declared."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


def normalize_schema(
    schema: Mapping[str, Any],
    *,
    reserved: frozenset[str] = frozenset(),
) -> dict[str, PropertySpec]:
    """Turn a schema mapping into an ordered ``{name: PropertySpec}`` dict.

    Raises:
        SchemaDefect: *schema* is not a mapping, a name is invalid or
            reserved, or a descriptor is malformed.
    """
    if not isinstance(schema, Mapping):
        msg = f"Schema must be a mapping of property names, got {type(schema).__name__}"
        raise SchemaDefect(msg)

    specs: dict[str, PropertySpec] = {}
    for name, descriptor in schema.items():
        _check_name(name, reserved)
        specs[name] = _to_spec(name, descriptor)
    return specs


def _check_name(name: Any, reserved: frozenset[str]) -> None:
    if not isinstance(name, str):
        msg = f"Property names must be strings, got {type(name).__name__}: {name!r}"
        raise SchemaDefect(msg)
    if not name:
        msg = "Property names must not be empty"
        raise SchemaDefect(msg, name=name)
    if name.startswith("_"):
        msg = f"Property name {name!r} must not start with an underscore"
        raise SchemaDefect(msg, name=name)
    if name in reserved:
        msg = f"Property name {name!r} is reserved by the container API"
        raise SchemaDefect(msg, name=name)


def _to_spec(name: str, descriptor: Any) -> PropertySpec:
    if isinstance(descriptor, PropertySpec):
        return descriptor
    if not isinstance(descriptor, Mapping):
        return PropertySpec(type=descriptor)
    try:
        return PropertySpec.model_validate(dict(descriptor))
    except ValidationError as exc:
        msg = f"Invalid descriptor for property {name!r}: {exc.errors()[0]['msg']}"
        raise SchemaDefect(msg, name=name) from exc

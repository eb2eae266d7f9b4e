"""Shape-frozen, type-checked, observable property containers."""

from capsule.container import Capsule
from capsule.domain.kinds import Kind
from capsule.domain.registry import TYPE_REGISTRY, TypeRegistry
from capsule.errors import (
    CapsuleError,
    ConfigError,
    SchemaDefect,
    ShapeViolation,
    TypeMismatch,
)
from capsule.resolver import resolve
from capsule.schema import UNSET, PropertySpec

__all__ = [
    "TYPE_REGISTRY",
    "UNSET",
    "Capsule",
    "CapsuleError",
    "ConfigError",
    "Kind",
    "PropertySpec",
    "SchemaDefect",
    "ShapeViolation",
    "TypeMismatch",
    "TypeRegistry",
    "resolve",
]

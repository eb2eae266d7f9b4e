"""Shared pytest fixtures and test helpers for capsule tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from datetime import datetime
from typing import Any

import pytest

from capsule.container import Capsule
from capsule.domain.registry import TypeRegistry
from capsule.schema import PropertySpec


class Person:
    def __init__(self, name: str, email: str) -> None:
        self.name = name
        self.email = email


class Employee(Person):
    pass


class Animal:
    def __init__(self, name: str, sound: str) -> None:
        self.name = name
        self.sound = sound


def person_schema() -> dict[str, Any]:
    """Schema covering every kind of type token."""
    return {
        "name": str,
        "phone": float,
        "emails": list,
        "location": dict,
        "has_children": bool,
        "spouse": Person,
        "dob": datetime,
        "is_available": Callable,
        "favorite_sports": None,
        "is_citizen": PropertySpec(type=bool, default=True),
    }


@pytest.fixture
def store() -> Capsule:
    """A fresh capsule built from :func:`person_schema`."""
    return Capsule(person_schema())


@pytest.fixture
def registry() -> TypeRegistry:
    """An isolated registry, so plugin tests never touch the global one."""
    return TypeRegistry.builtin()


@pytest.fixture
def _restore_logging() -> Generator[None]:
    """Restore root and capsule logger state after a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger("capsule")
    lib_level = lib.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.setLevel(lib_level)

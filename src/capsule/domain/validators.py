"""Built-in validator predicates and validator factories.

Every validator is a pure ``(value) -> bool`` predicate. The container
only depends on that shape; it never inspects which predicate it holds.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Mapping
from typing import Any

Validator = Callable[[Any], bool]


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    """Finite real number. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    if isinstance(value, numbers.Rational):
        return True
    return math.isfinite(value)


def is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_array(value: Any) -> bool:
    """Ordered sequence container: ``list`` or ``tuple``."""
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    """Plain key-value record. Sequences never qualify."""
    return isinstance(value, Mapping)


def accept_any(value: Any) -> bool:
    return True


def reject_all(value: Any) -> bool:
    return False


def instance_of(cls: Any) -> Validator:
    """Build a validator that accepts instances of *cls* or its subclasses."""

    def check(value: Any) -> bool:
        return isinstance(value, cls)

    check.__name__ = f"instance_of_{getattr(cls, '__name__', 'class')}"
    check.__qualname__ = check.__name__
    return check


def is_none(value: Any) -> bool:
    return value is None


def one_of(*choices: Any) -> Validator:
    """Build a validator that accepts exactly the listed values.

    Matching is by equality and exact type, so ``True`` does not match ``1``.
    """
    allowed = tuple(choices)

    def check(value: Any) -> bool:
        return any(type(value) is type(c) and value == c for c in allowed)

    check.__name__ = "one_of"
    check.__qualname__ = "one_of"
    return check


def any_of(*validators: Validator) -> Validator:
    """Combine validators; a value passes if any member accepts it."""
    members = tuple(validators)

    def check(value: Any) -> bool:
        return any(v(value) for v in members)

    check.__name__ = "any_of"
    check.__qualname__ = "any_of"
    return check

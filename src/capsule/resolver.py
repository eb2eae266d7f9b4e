"""Type token resolution.

:func:`resolve` turns a declared type token into a validator. It is
total: any object is accepted as a token and resolution never raises.

Dispatch order:

1. Wildcard (``None``, ``Kind.ANY``, ``typing.Any``) accepts everything.
2. Unions (``str | None``) accept a value if any member accepts it.
3. ``Literal[...]`` accepts exactly the listed values; ``Annotated[T, ...]``
   resolves as ``T``.
4. Parameterised generics (``list[str]``) resolve through their origin.
   Members are not checked.
5. Registered tokens (built-in kinds, aliases, plugin tokens).
6. Class-like tokens become an ``isinstance`` check.
7. Anything else yields a validator that rejects every value.
"""

from __future__ import annotations

import logging
import types
import typing
from typing import Any

from capsule.domain.kinds import Kind
from capsule.domain.registry import TYPE_REGISTRY, TypeRegistry
from capsule.domain.validators import (
    Validator,
    accept_any,
    any_of,
    instance_of,
    is_none,
    one_of,
    reject_all,
)

logger = logging.getLogger(__name__)


def resolve(token: Any, *, registry: TypeRegistry | None = None) -> Validator:
    """Resolve *token* to a validator.

    Args:
        token: Declared type token.
        registry: Registry consulted for built-in and plugin tokens.
            Defaults to the process-wide :data:`TYPE_REGISTRY`.
    """
    reg = TYPE_REGISTRY if registry is None else registry

    if is_wildcard(token):
        return accept_any

    origin = typing.get_origin(token)

    if origin is typing.Union or isinstance(token, types.UnionType):
        members = [
            is_none if arg is type(None) else resolve(arg, registry=reg)
            for arg in typing.get_args(token)
        ]
        return any_of(*members)

    if origin is typing.Literal:
        return one_of(*typing.get_args(token))

    if origin is typing.Annotated:
        return resolve(typing.get_args(token)[0], registry=reg)

    if origin is not None:
        return resolve(origin, registry=reg)

    validator = reg.lookup(token)
    if validator is not None:
        return validator

    if is_class_like(token):
        return instance_of(token)

    logger.warning("Unresolvable type token %r; every value will be rejected", token)
    return reject_all


def is_wildcard(token: Any) -> bool:
    """Whether *token* means "no constraint"."""
    return token is None or token is typing.Any or token is Kind.ANY


def is_class_like(token: Any) -> bool:
    """Whether *token* can be the second argument of ``isinstance``."""
    if isinstance(token, type):
        return True
    try:
        isinstance(None, token)
    except TypeError:
        return False
    return True

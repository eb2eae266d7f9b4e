"""Built-in type kinds and their Python builtin aliases.

A property may be declared either with a :class:`Kind` member or with
the builtin type that stands for it (``str`` for ``Kind.STRING`` and
so on). ``None`` and ``Kind.ANY`` both mean "no constraint".
"""

from __future__ import annotations

from enum import StrEnum


class Kind(StrEnum):
    """Built-in value kinds understood by the resolver."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


BUILTIN_ALIASES: dict[type, Kind] = {
    str: Kind.STRING,
    float: Kind.NUMBER,
    int: Kind.INTEGER,
    bool: Kind.BOOLEAN,
    list: Kind.ARRAY,
    dict: Kind.OBJECT,
}

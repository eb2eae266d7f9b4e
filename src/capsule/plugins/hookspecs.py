"""Pluggy hook specifications for capsule extensions.

A single setup-time hook lets plugins contribute type tokens, such as
domain marker objects or third-party classes that need a looser check
than ``isinstance``.
"""

from __future__ import annotations

from typing import Any

import pluggy

from capsule.domain.validators import Validator

hookspec = pluggy.HookspecMarker("capsule")
hookimpl = pluggy.HookimplMarker("capsule")


class CapsuleHookSpec:
    """Hook specifications for the capsule plugin system."""

    @hookspec
    def register_type_validators(self) -> dict[Any, Validator] | None:
        """Return token -> validator mappings to extend the type registry."""

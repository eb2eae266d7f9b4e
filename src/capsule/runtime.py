"""Application bootstrap: logging plus plugin loading in one call."""

from __future__ import annotations

import logging

from capsule.config.logging import configure_logging
from capsule.config.settings import CapsuleSettings
from capsule.domain.registry import TypeRegistry
from capsule.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def bootstrap(
    settings: CapsuleSettings | None = None,
    *,
    registry: TypeRegistry | None = None,
) -> PluginManager:
    """Configure logging and load plugins according to *settings*.

    When *settings* is None they are loaded from the environment and any
    discovered ``capsule.toml``. Returns the loaded plugin manager.
    """
    if settings is None:
        settings = CapsuleSettings.load()

    configure_logging(
        verbose=settings.logging.verbose,
        log_json=settings.logging.log_json,
    )

    manager = PluginManager(registry)
    names = manager.discover_and_load(
        entry_points=settings.plugins.entry_points,
        local_dir=settings.plugins.local_dir,
        disabled=settings.plugins.disabled,
    )
    logger.debug("Loaded plugins: %s", names)
    return manager

"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, capsule.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    local_dir: Path | None = None
    disabled: list[str] = Field(default_factory=list)


class CapsuleConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

"""Tests for config models — defaults and sparse overrides."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from capsule.config.models import CapsuleConfig, LoggingConfig, PluginsConfig


class TestLoggingConfig:
    def test_defaults(self) -> None:
        cfg = LoggingConfig()
        assert cfg.verbose is False
        assert cfg.log_json is False

    def test_frozen(self) -> None:
        cfg = LoggingConfig(verbose=True)
        with pytest.raises(ValidationError):
            cfg.verbose = False  # type: ignore[misc]


class TestPluginsConfig:
    def test_defaults(self) -> None:
        cfg = PluginsConfig()
        assert cfg.entry_points is True
        assert cfg.local_dir is None
        assert cfg.disabled == []

    def test_local_dir_coerced_to_path(self) -> None:
        cfg = PluginsConfig(local_dir="plugins")
        assert cfg.local_dir == Path("plugins")


class TestCapsuleConfig:
    def test_full_defaults(self) -> None:
        cfg = CapsuleConfig()
        assert cfg.logging.verbose is False
        assert cfg.plugins.entry_points is True

    def test_sparse_override(self) -> None:
        cfg = CapsuleConfig.model_validate({"logging": {"verbose": True}})
        assert cfg.logging.verbose is True
        assert cfg.logging.log_json is False
        assert cfg.plugins.entry_points is True

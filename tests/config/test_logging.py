"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from capsule.config.logging import configure_logging
from capsule.container import Capsule

pytestmark = pytest.mark.usefixtures("_restore_logging")


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("capsule").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("capsule").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        structlog.get_logger("capsule.test").warning("hello world", key="val")
        assert "hello world" in stream.getvalue()

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("capsule.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "capsule.test"
        assert "timestamp" in parsed

    def test_json_mode_structures_tracebacks(self) -> None:
        stream = io.StringIO()
        configure_logging(log_json=True, stream=stream)
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logging.getLogger("capsule.plugins.manager").warning("plugin failed", exc_info=True)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "plugin failed"
        assert parsed["exception"][0]["exc_type"] == "RuntimeError"
        assert parsed["exception"][0]["exc_value"] == "boom"

    def test_human_mode_renders_tracebacks(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logging.getLogger("capsule.plugins.manager").warning("plugin failed", exc_info=True)
        output = stream.getvalue()
        assert "plugin failed" in output
        assert "RuntimeError" in output

    def test_stderr_is_default_stream(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("capsule.resolver").warning("to stderr")
        captured = capfd.readouterr()
        assert json.loads(captured.err.strip())["event"] == "to stderr"

    def test_library_debug_records_are_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        Capsule({"name": str})
        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert any(r["logger"] == "capsule.container" and r["level"] == "debug" for r in records)

    def test_library_debug_hidden_when_not_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        Capsule({"name": str})
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

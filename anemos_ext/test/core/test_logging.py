"""Tests for anemos_ext.core.logging module."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

import anemos_ext.core.logging as logging_mod
from anemos_ext.core.logging import LOG_LEVEL_ENV, configure_defaults, get_logger, setup_logging


@pytest.fixture
def fresh_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(logging_mod, "_LOGGING_CONFIGURED", False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    logging_mod.configure_defaults()


@pytest.mark.usefixtures("fresh_logging")
class TestSetupLogging:
    def test_json_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "anemos-ext.log"
        setup_logging(level="INFO", log_file=log_file, console_output=False)

        get_logger("anemos_ext.test").info("binary downloaded", path="/cache/anemos")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["event"] == "binary downloaded"
        assert entry["path"] == "/cache/anemos"
        assert entry["level"] == "info"

    def test_env_overrides_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

        setup_logging(level="WARNING", console_output=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_idempotent(self) -> None:
        setup_logging(level="ERROR", console_output=False)
        setup_logging(level="DEBUG", console_output=False)

        assert logging.getLogger().level == logging.ERROR


@pytest.mark.usefixtures("fresh_logging")
class TestUnconfiguredLogging:
    """Logging before setup_logging() runs, as when embedded in a host."""

    def test_stdout_stays_clean(self, capsys: pytest.CaptureFixture[str]) -> None:
        structlog.reset_defaults()
        configure_defaults()
        log = get_logger("anemos_ext.tools.resolver")

        log.debug("found on search path", command="anemos")
        log.warning("download failed", url="https://example.com/anemos")

        assert capsys.readouterr().out == ""

    def test_debug_dropped_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        structlog.reset_defaults()
        configure_defaults()
        log = get_logger("anemos_ext.tools.resolver")

        with caplog.at_level(logging.WARNING):
            log.debug("found on search path")
            log.warning("download failed")

        assert [r.levelname for r in caplog.records] == ["WARNING"]
        assert "download failed" in caplog.records[0].getMessage()

"""Tests for structlog setup."""

from __future__ import annotations

import json
import logging

import structlog

from cspolicy.config.loader import CSPSettings
from cspolicy.logging_config import _rename_logger_to_module, configure_logging, setup_logging
from cspolicy.policy import Policy


class TestSetupLogging:
    def test_json_log_fields(self, capfd):
        setup_logging(log_level="debug", json_format=True)
        logger = structlog.get_logger("cspolicy.test")
        logger.info("test_event")
        log = json.loads(capfd.readouterr().out.strip())
        assert log["event"] == "test_event"
        assert log["level"] == "info"
        assert log["module"] == "cspolicy.test"
        assert "timestamp" in log

    def test_level_configurable(self):
        setup_logging(log_level="warning", json_format=False)
        assert logging.getLogger().level == logging.WARNING

    def test_quiet_loggers(self):
        setup_logging(log_level="debug")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_dropped_directive_logged(self, capfd):
        setup_logging(log_level="debug", json_format=True)
        Policy({"milktoast": ["suppa"]})
        lines = [json.loads(line) for line in capfd.readouterr().out.splitlines() if line]
        assert any(
            line["event"] == "csp_directive_ignored" and line["directive"] == "milktoast"
            for line in lines
        )

    def test_configure_logging_from_settings(self, capfd):
        configure_logging(CSPSettings(log_level="warning", log_json=True))
        assert logging.getLogger().level == logging.WARNING
        structlog.get_logger("cspolicy.test").warning("configured")
        log = json.loads(capfd.readouterr().out.strip())
        assert log["event"] == "configured"

    def test_configure_logging_reads_env(self, monkeypatch):
        monkeypatch.setenv("CSP_LOG_LEVEL", "error")
        configure_logging()
        assert logging.getLogger().level == logging.ERROR

    def test_rename_logger_to_module_processor(self):
        event_dict = {"logger": "cspolicy.policy", "event": "test"}
        result = _rename_logger_to_module(None, None, event_dict)
        assert result == {"module": "cspolicy.policy", "event": "test"}

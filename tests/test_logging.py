"""
tests/test_logging.py
Package logger setup: levels, rotating file output and env defaults.
"""

import logging
import logging.handlers

from convo_core.logging_config import setup_logging


def _package_handlers():
    return logging.getLogger("convo_core").handlers


class TestSetupLogging:

    def test_console_only_by_default(self, monkeypatch):
        monkeypatch.delenv("CONVO_CORE_LOG_FILE", raising=False)
        monkeypatch.delenv("CONVO_CORE_LOG_LEVEL", raising=False)
        setup_logging()
        handlers = _package_handlers()
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.handlers.RotatingFileHandler)
        assert logging.getLogger("convo_core").level == logging.INFO

    def test_explicit_log_file(self, tmp_path):
        log_path = tmp_path / "logs" / "convo.log"
        setup_logging(level="DEBUG", log_file=str(log_path))
        logging.getLogger("convo_core.context.window").debug("window applied")
        for handler in _package_handlers():
            handler.flush()
        assert "window applied" in log_path.read_text(encoding="utf-8")

    def test_log_file_from_env(self, tmp_path, monkeypatch):
        log_path = tmp_path / "env.log"
        monkeypatch.setenv("CONVO_CORE_LOG_FILE", str(log_path))
        setup_logging(level="WARNING")
        file_handlers = [
            h for h in _package_handlers()
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert log_path.exists()

    def test_none_disables_file(self, monkeypatch):
        monkeypatch.setenv("CONVO_CORE_LOG_FILE", "none")
        setup_logging()
        assert len(_package_handlers()) == 1

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("CONVO_CORE_LOG_LEVEL", "error")
        monkeypatch.delenv("CONVO_CORE_LOG_FILE", raising=False)
        setup_logging()
        assert logging.getLogger("convo_core").level == logging.ERROR

    def test_configures_once(self, monkeypatch):
        monkeypatch.delenv("CONVO_CORE_LOG_FILE", raising=False)
        setup_logging()
        setup_logging(level="DEBUG")
        assert len(_package_handlers()) == 1
        assert logging.getLogger("convo_core").level == logging.INFO

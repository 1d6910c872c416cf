"""
Unit tests for logging setup.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from kb_search.logging_config import setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test console + rotating file handlers"""

    def test_console_and_file_handlers(self, tmp_path):
        session_log = setup_logging(log_file=str(tmp_path / "logs" / "kb-search.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 2
        assert any(isinstance(h, RotatingFileHandler) for h in handlers)
        assert session_log.parent == tmp_path / "logs"
        assert session_log.name.startswith("kb-search_")

    def test_old_session_logs_cleaned_up(self, tmp_path):
        for i in range(7):
            (tmp_path / f"kb-search_2024010{i}_000000.log").write_text("old")

        setup_logging(log_file=str(tmp_path / "kb-search.log"))

        remaining = sorted(tmp_path.glob("kb-search_*.log"))
        assert len(remaining) == 5  # 4 newest old logs + current session

    def test_file_logging_disabled(self):
        assert setup_logging(log_file=None) is None
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not any(isinstance(h, RotatingFileHandler) for h in handlers)

    def test_noisy_loggers_quieted(self):
        setup_logging(log_file=None)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

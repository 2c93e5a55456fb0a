"""Tests for CLI logging configuration."""

import logging

import pytest
from rich.logging import RichHandler

from rolerelay.cli.logging_setup import setup_logging


@pytest.fixture
def logger_name():
    name = "rolerelay.test_logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_level_follows_verbose(self, logger_name):
        logger = setup_logging(verbose=True, logger_name=logger_name)
        (handler,) = logger.handlers
        assert isinstance(handler, RichHandler)
        assert handler.level == logging.DEBUG

        logger = setup_logging(logger_name=logger_name)
        assert [h.level for h in logger.handlers] == [logging.INFO]

    def test_repeated_setup_replaces_handlers(self, logger_name):
        setup_logging(logger_name=logger_name)
        logger = setup_logging(logger_name=logger_name)
        assert len(logger.handlers) == 1

    def test_file_receives_debug(self, logger_name, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(log_file=str(log_file), logger_name=logger_name)

        logger.debug("assembled 3 blocks")
        for handler in logger.handlers:
            handler.flush()

        assert "assembled 3 blocks" in log_file.read_text()

    def test_quiets_http_loggers(self, logger_name):
        setup_logging(logger_name=logger_name)
        assert logging.getLogger("httpx").level == logging.WARNING

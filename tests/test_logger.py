"""
Tests for setup_logger.
"""
import logging

from textchain.config import settings
from textchain.utils.logger import setup_logger


class TestSetupLogger:
    def test_level_defaults_to_settings(self):
        logger = setup_logger("textchain.tests.default_level")

        assert logger.level == logging.getLevelName(settings.LOG_LEVEL.upper())

    def test_explicit_level(self):
        logger = setup_logger("textchain.tests.explicit_level", level="debug")

        assert logger.level == logging.DEBUG

    def test_single_handler(self):
        setup_logger("textchain.tests.handlers")
        logger = setup_logger("textchain.tests.handlers", level=None)

        assert len(logger.handlers) == 1
        assert not logger.propagate

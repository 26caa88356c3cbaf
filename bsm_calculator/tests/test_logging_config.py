"""Tests for logging setup."""

import logging

from bsm_calculator.utils.logging_config import get_logger, setup_logging


class TestLogging:
    """Test suite for logging configuration."""

    def test_level_and_handlers(self):
        logger = setup_logging(log_level="debug")

        assert logger.name == "bsm_calculator"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_repeat_setup_does_not_duplicate(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "calc.log"
        logger = setup_logging(log_level="INFO", log_file=str(log_file))

        get_logger("pricer").info("priced %s", "call")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "priced call" in log_file.read_text()

    def test_get_logger_names(self):
        assert get_logger().name == "bsm_calculator"
        assert get_logger("implied_vol").name == "bsm_calculator.implied_vol"

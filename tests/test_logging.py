"""Tests for logging helpers."""

import logging

from rich.logging import RichHandler

from biosym.utils.logging import configure_logging, get_logger


class TestGetLogger:
    """Tests for get_logger."""

    def test_component_name(self) -> None:
        """Test that components live under the package logger."""
        assert get_logger("splitter").name == "biosym.splitter"
        assert get_logger().name == "biosym"

    def test_no_handlers(self) -> None:
        """Test that library loggers carry no handlers of their own."""
        assert get_logger("alignment").handlers == []


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_rich_handler(self, biosym_logger: logging.Logger) -> None:
        """Test that a rich handler is attached to the package logger."""
        biosym_logger.handlers.clear()

        logger = configure_logging("INFO")

        assert logger is biosym_logger
        assert [type(h) for h in logger.handlers] == [RichHandler]
        assert logger.level == logging.INFO

    def test_repeated_calls(self, biosym_logger: logging.Logger) -> None:
        """Test that repeated calls keep one handler and update the level."""
        biosym_logger.handlers.clear()

        configure_logging("warning")
        configure_logging(logging.DEBUG)

        handlers = [h for h in biosym_logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert biosym_logger.level == logging.DEBUG

    def test_component_records_propagate(self, biosym_logger: logging.Logger) -> None:
        """Test that component loggers inherit the configured level."""
        configure_logging("ERROR")

        assert get_logger("cli").getEffectiveLevel() == logging.ERROR

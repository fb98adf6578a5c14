"""
Tests for logger setup.
"""
import logging

import recordcsv
from recordcsv.core.logging_config import setup_logger


def test_import_leaves_handlers_to_application():
    """Test that importing the package only attaches a NullHandler."""
    handlers = logging.getLogger(recordcsv.__name__).handlers

    assert any(isinstance(h, logging.NullHandler) for h in handlers)
    assert not any(type(h) is logging.StreamHandler for h in handlers)


def test_setup_logger_adds_console_handler_once():
    """Test that setup_logger configures a logger exactly once."""
    name = "recordcsv.tests.setup"
    logger = logging.getLogger(name)
    logger.addHandler(logging.NullHandler())

    try:
        setup_logger(name, level="debug")
        setup_logger(name, level="warning")

        stream_handlers = [h for h in logger.handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        logger.handlers.clear()

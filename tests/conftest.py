"""Shared fixtures."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture
def biosym_logger() -> Iterator[logging.Logger]:
    """The package logger, restored to a clean state afterwards."""
    logger = logging.getLogger("biosym")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)

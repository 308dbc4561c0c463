"""Shared pytest fixtures for the ttsclean test suite."""

from __future__ import annotations

from collections.abc import Iterator
from io import StringIO

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def _reset_loguru_handlers() -> Iterator[None]:
    """Drop loguru handlers so no test writes into a stream captured by another."""

    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def log_sink() -> StringIO:
    """Capture loguru messages emitted outside a `RunLogger`."""

    sink = StringIO()
    logger.add(sink, format="{message}", level="DEBUG", colorize=False)
    return sink

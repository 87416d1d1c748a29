"""Test fixtures."""

from collections.abc import Generator
import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> Generator[None, None, None]:
    """Capture library debug logging for every test."""
    with caplog.at_level(logging.DEBUG, logger="ical_recur"):
        yield

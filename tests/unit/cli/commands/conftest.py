"""Shared fixtures for CLI command tests."""

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from termtree.lib.logging_config import PACKAGE_LOGGER


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None]:
    """Drop handlers the commands attach to the package logger.

    Commands bind a handler to the runner's temporary stderr; later tests
    must not write to it.
    """
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)

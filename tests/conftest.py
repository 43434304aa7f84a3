"""Shared fixtures."""

import logging

import pytest

from unittask.framework import TestFramework
from unittask.host import TaskContext
from unittask.logs import TRACE


@pytest.fixture
def logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    """Task logger with every level captured."""
    caplog.set_level(TRACE, logger="unittask")
    return logging.getLogger("unittask.test")


@pytest.fixture
def context(logger: logging.Logger) -> TaskContext:
    return TaskContext(logger)


@pytest.fixture
def framework() -> TestFramework:
    return TestFramework()


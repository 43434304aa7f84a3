"""Observer-driven bridge over stdlib unittest.

The module-level functions operate on a process-wide default framework, so a
test harness can register cases without passing a framework around::

    from unittask import framework

    def main():
        framework.test("adds numbers", lambda: ...)
"""

import unittest
from typing import Callable, Optional

from unittask.framework.configuration import Configuration
from unittask.framework.models import Outcome, TestCase
from unittask.framework.runner import TestFramework

_default_framework: Optional[TestFramework] = None


def get_default_framework() -> TestFramework:
    """Return the process-wide framework, creating it on first use."""
    global _default_framework
    if _default_framework is None:
        _default_framework = TestFramework()
    return _default_framework


def set_configuration(configuration: Configuration) -> None:
    get_default_framework().configuration = configuration


def test(description: str, func: Callable[[], None]) -> TestCase:
    return get_default_framework().test(description, func)


def add_test(test_case: unittest.TestCase, description: Optional[str] = None) -> TestCase:
    return get_default_framework().add_test(test_case, description)


def add_tests(suite: unittest.TestSuite) -> list[TestCase]:
    return get_default_framework().add_tests(suite)


def filter_tests(predicate: Callable[[TestCase], bool]) -> None:
    get_default_framework().filter_tests(predicate)


def log_message(message: str) -> None:
    get_default_framework().log_message(message)


def test_cases() -> list[TestCase]:
    return get_default_framework().test_cases


def run_tests() -> None:
    get_default_framework().run_tests()


__all__ = [
    "Configuration",
    "Outcome",
    "TestCase",
    "TestFramework",
    "add_test",
    "add_tests",
    "filter_tests",
    "get_default_framework",
    "log_message",
    "run_tests",
    "set_configuration",
    "test",
    "test_cases",
]

"""Data models for registered test cases."""

import unittest
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    """Terminal classification of a test case."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class TestCase:
    """A registered test and the result of its latest run.

    Instances are owned by the framework; observers only read them.
    """

    __test__ = False

    description: str
    test: unittest.TestCase = field(repr=False)
    result: Optional[Outcome] = None
    message: str = ""
    stack_trace: Optional[str] = None
    running_time: timedelta = field(default_factory=timedelta)
    enabled: bool = True
    skipped: bool = False

    @property
    def passed(self) -> bool:
        return self.result == Outcome.PASS

    def reset(self) -> None:
        """Clear the result of a previous run."""
        self.result = None
        self.message = ""
        self.stack_trace = None
        self.running_time = timedelta()
        self.skipped = False

"""Task adapter that reports unit test runs to a task context."""

from unittask.core.completion import CompletionSignal
from unittask.core.discovery import TestDiscovery
from unittask.core.filtering import FilterSpec, matches
from unittask.core.observer import TaskTestConfiguration
from unittask.core.summary import SummaryMode, SummaryOptions, SummaryReporter, Tally
from unittask.core.task import create_unit_test_task

__all__ = [
    "CompletionSignal",
    "FilterSpec",
    "SummaryMode",
    "SummaryOptions",
    "SummaryReporter",
    "Tally",
    "TaskTestConfiguration",
    "TestDiscovery",
    "create_unit_test_task",
    "matches",
]

"""
UnitTask - run unittest suites as named, awaitable tasks.

This package provides tools to:
- Register unittest cases with an observer-driven framework
- List or run them, filtered by substrings of their descriptions
- Report each result and an itemized summary through a task's logger
- Hand the run's success or failure back to a task runner
"""

__version__ = "0.1.0"
__author__ = "UnitTask Team"

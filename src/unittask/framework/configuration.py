"""Lifecycle callbacks a framework invokes during a run."""

from typing import Optional, Sequence

from unittask.framework.models import TestCase


class Configuration:
    """Observer of a test run. Every handler is a no-op by default.

    Subclasses override the events they care about. The framework invokes
    handlers one at a time, in lifecycle order:
    init, start, (test start, log message*, result, result changed*)*,
    summary, done.
    """

    auto_start = True

    def on_init(self) -> None:
        pass

    def on_start(self) -> None:
        pass

    def on_test_start(self, test_case: TestCase) -> None:
        pass

    def on_log_message(self, test_case: Optional[TestCase], message: str) -> None:
        pass

    def on_test_result(self, test_case: TestCase) -> None:
        pass

    def on_test_result_changed(self, test_case: TestCase) -> None:
        pass

    def on_summary(
        self,
        passed: int,
        failed: int,
        errors: int,
        results: Sequence[TestCase],
        uncaught_error: Optional[str],
    ) -> None:
        pass

    def on_done(self, success: bool) -> None:
        pass

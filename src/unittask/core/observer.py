"""Framework configuration that reports a run to a task context."""

from typing import Optional, Sequence

from unittask.core.completion import CompletionSignal
from unittask.core.summary import SummaryOptions, SummaryReporter
from unittask.framework.configuration import Configuration
from unittask.framework.models import Outcome, TestCase
from unittask.host.context import TaskContext

RUN_FAILED_REASON = "The test run did not complete successfully."


class TaskTestConfiguration(Configuration):
    """Logs each lifecycle event and resolves a completion signal when done.

    Runs never start on their own; the task starts them explicitly after
    installing this configuration and any filter.
    """

    auto_start = False

    def __init__(
        self,
        context: TaskContext,
        summary: Optional[SummaryOptions] = None,
        signal: Optional[CompletionSignal] = None,
    ):
        self._context = context
        self._summary = summary or SummaryOptions()
        self._signal = signal or CompletionSignal()
        self._reporter = SummaryReporter(context, self._summary)

    @property
    def context(self) -> TaskContext:
        return self._context

    @property
    def summary(self) -> SummaryOptions:
        return self._summary

    @property
    def signal(self) -> CompletionSignal:
        return self._signal

    def on_init(self) -> None:
        self._context.config("config: on_init")

    def on_start(self) -> None:
        self._context.config("config: on_start")

    def on_test_start(self, test_case: TestCase) -> None:
        self._context.config(f"Starting {test_case.description}")

    def on_log_message(self, test_case: Optional[TestCase], message: str) -> None:
        if test_case is not None:
            message = f"{test_case.description}\n{message}"
        self._context.trace(message)

    def on_test_result(self, test_case: TestCase) -> None:
        if test_case.result is None:
            raise AssertionError(
                f"Result reported for {test_case.description!r} without an outcome"
            )

        if test_case.result == Outcome.PASS:
            self._context.info(f"{test_case.description} -- PASS")
        else:
            lines = [f"[{test_case.result}] {test_case.description}", test_case.message]
            if test_case.stack_trace is not None:
                lines.append(test_case.stack_trace)
            self._context.severe("\n".join(lines))

        self._context.trace(f"Duration: {test_case.running_time}")

    def on_test_result_changed(self, test_case: TestCase) -> None:
        self._context.severe(f"Result changed for {test_case.description}")
        self._context.severe(
            f"[{test_case.result}] {test_case.description}\n"
            f"{test_case.message}\n"
            f"{test_case.stack_trace}"
        )

    def on_summary(
        self,
        passed: int,
        failed: int,
        errors: int,
        results: Sequence[TestCase],
        uncaught_error: Optional[str],
    ) -> None:
        self._reporter.report(passed, failed, errors, results, uncaught_error)

    def on_done(self, success: bool) -> None:
        if success:
            self._signal.succeed()
        else:
            self._signal.fail(RUN_FAILED_REASON)

"""End-of-run summary: itemized outcome buckets and the final tally."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from unittask.framework.models import Outcome, TestCase
from unittask.host.context import TaskContext


class SummaryMode(str, Enum):
    """Which outcome buckets get an itemized listing."""

    ALL = "all"
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class SummaryOptions:
    """Enabled summary buckets, fixed for the lifetime of a run."""

    passes: bool = False
    failures: bool = False
    errors: bool = False

    @classmethod
    def from_mode(cls, mode: SummaryMode | str | None) -> "SummaryOptions":
        if mode is None:
            return cls()
        mode = SummaryMode(mode)
        return cls(
            passes=mode in (SummaryMode.ALL, SummaryMode.PASS),
            failures=mode in (SummaryMode.ALL, SummaryMode.FAIL),
            errors=mode in (SummaryMode.ALL, SummaryMode.ERROR),
        )

    @property
    def buckets(self) -> frozenset[Outcome]:
        enabled = set()
        if self.passes:
            enabled.add(Outcome.PASS)
        if self.failures:
            enabled.add(Outcome.FAIL)
        if self.errors:
            enabled.add(Outcome.ERROR)
        return frozenset(enabled)


@dataclass(frozen=True)
class Tally:
    """Outcome counts of a completed run."""

    passed: int = 0
    failed: int = 0
    errors: int = 0
    uncaught_error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failed == 0 and self.errors == 0 and self.uncaught_error is None

    @property
    def message(self) -> str:
        return f"{self.passed} PASSED, {self.failed} FAILED, {self.errors} ERRORS"


# bucket order and the channel each one is itemized under
_BUCKETS = (
    (Outcome.PASS, "PASS"),
    (Outcome.FAIL, "FAIL"),
    (Outcome.ERROR, "ERROR"),
)


class SummaryReporter:
    """Writes the end-of-run summary to a task context."""

    def __init__(self, context: TaskContext, options: SummaryOptions):
        self.context = context
        self.options = options

    def report(
        self,
        passed: int,
        failed: int,
        errors: int,
        results: Sequence[TestCase],
        uncaught_error: Optional[str] = None,
    ) -> Tally:
        """Log itemized buckets, then the tally line.

        Passing cases are itemized at info level, failures and errors at
        severe. The tally is info on success and severe otherwise.
        """
        tally = Tally(passed, failed, errors, uncaught_error)
        enabled = self.options.buckets

        for outcome, channel in _BUCKETS:
            if outcome not in enabled:
                continue
            sub_context = self.context.get_sub_logger(channel)
            for test_case in results:
                if test_case.result != outcome:
                    continue
                if outcome == Outcome.PASS:
                    sub_context.info(test_case.description)
                else:
                    sub_context.severe(test_case.description)

        if uncaught_error is not None:
            self.context.severe(f"Uncaught error:\n{uncaught_error}")

        if tally.success:
            self.context.info(tally.message)
        else:
            self.context.severe(tally.message)
        return tally

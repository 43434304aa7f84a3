"""Registry and run loop that drives unittest cases through a Configuration."""

import asyncio
import logging
import time
import traceback
import unittest
from datetime import timedelta
from typing import Callable, Iterable, Optional

from unittask.framework.configuration import Configuration
from unittask.framework.models import Outcome, TestCase

log = logging.getLogger(__name__)


def _format_message(err: tuple) -> str:
    return "".join(traceback.format_exception_only(err[0], err[1])).strip()


def _format_stack(err: tuple) -> str:
    return "".join(traceback.format_exception(*err)).rstrip()


def _iter_tests(suite: unittest.TestSuite) -> Iterable[unittest.TestCase]:
    for test in suite:
        if isinstance(test, unittest.TestSuite):
            yield from _iter_tests(test)
        else:
            yield test


class _ObservingResult(unittest.TestResult):
    """Translates unittest result events into framework reports."""

    def __init__(self, framework: "TestFramework", cases: Iterable[TestCase]):
        super().__init__()
        self.framework = framework
        self.uncaught_errors: list[str] = []
        self._cases = {id(case.test): case for case in cases}
        self._started: dict[int, float] = {}
        self._subtest_errors: dict[int, list[tuple]] = {}

    def _case(self, test) -> Optional[TestCase]:
        return self._cases.get(id(test))

    def _elapsed(self, test) -> timedelta:
        started = self._started.get(id(test))
        if started is None:
            return timedelta()
        return timedelta(seconds=time.perf_counter() - started)

    def _report(
        self, test, outcome: Outcome, message: str, stack_trace: Optional[str]
    ) -> None:
        case = self._case(test)
        if case is None:
            return
        self.framework._report(case, outcome, message, stack_trace, self._elapsed(test))

    def _record(
        self,
        test,
        outcome: Outcome,
        err: Optional[tuple] = None,
        message: str = "",
    ) -> None:
        self._flush_subtests(test)
        stack_trace = None
        if err is not None:
            message = message or _format_message(err)
            stack_trace = _format_stack(err)
        self._report(test, outcome, message, stack_trace)

    def _flush_subtests(self, test) -> None:
        """Report the failed sub-tests of a case as one outcome."""
        failures = self._subtest_errors.pop(id(test), None)
        if not failures:
            return
        if all(issubclass(err[0], test.failureException) for _, err in failures):
            outcome = Outcome.FAIL
        else:
            outcome = Outcome.ERROR
        message = "\n".join(f"{subtest}: {_format_message(err)}" for subtest, err in failures)
        stack_trace = "\n\n".join(_format_stack(err) for _, err in failures)
        self._report(test, outcome, message, stack_trace)

    def startTest(self, test) -> None:
        super().startTest(test)
        case = self._case(test)
        if case is None:
            return
        self._started[id(test)] = time.perf_counter()
        self.framework._begin(case)

    def stopTest(self, test) -> None:
        # unittest reports nothing else for a case whose only failures are sub-tests
        self._flush_subtests(test)
        super().stopTest(test)
        if self._case(test) is not None:
            self.framework._end()

    def addSuccess(self, test) -> None:
        super().addSuccess(test)
        self._record(test, Outcome.PASS)

    def addFailure(self, test, err) -> None:
        super().addFailure(test, err)
        self._record(test, Outcome.FAIL, err)

    def addError(self, test, err) -> None:
        super().addError(test, err)
        if self._case(test) is None:
            # class and module fixtures report errors against placeholder tests
            self.uncaught_errors.append(f"{test}\n{_format_stack(err)}")
            return
        self._record(test, Outcome.ERROR, err)

    def addSubTest(self, test, subtest, err) -> None:
        super().addSubTest(test, subtest, err)
        if err is None or self._case(test) is None:
            return
        self._subtest_errors.setdefault(id(test), []).append((subtest, err))

    def addSkip(self, test, reason) -> None:
        super().addSkip(test, reason)
        case = self._case(test)
        if case is None:
            return
        case.skipped = True
        self.framework.log_message(f"Skipped: {reason}")

    def addExpectedFailure(self, test, err) -> None:
        super().addExpectedFailure(test, err)
        self._record(test, Outcome.PASS, message="Failed as expected")

    def addUnexpectedSuccess(self, test) -> None:
        super().addUnexpectedSuccess(test)
        self._record(test, Outcome.FAIL, message="Unexpected success")


class TestFramework:
    """Registry of test cases with a pluggable lifecycle configuration."""

    __test__ = False

    def __init__(self, configuration: Optional[Configuration] = None):
        self._configuration = configuration or Configuration()
        self._cases: list[TestCase] = []
        self._descriptions: set[str] = set()
        self._current: Optional[TestCase] = None
        self._initialized = False
        self._running = False

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @configuration.setter
    def configuration(self, configuration: Configuration) -> None:
        if self._initialized:
            raise RuntimeError(
                "The configuration cannot be replaced after the framework is initialized"
            )
        self._configuration = configuration

    @property
    def test_cases(self) -> list[TestCase]:
        """All registered cases, in registration order."""
        return list(self._cases)

    @property
    def enabled_cases(self) -> list[TestCase]:
        return [case for case in self._cases if case.enabled]

    @property
    def running(self) -> bool:
        return self._running

    def ensure_initialized(self) -> None:
        """Notify the configuration once, and start the run if it auto-starts."""
        if self._initialized:
            return
        self._initialized = True
        self._configuration.on_init()

        if self._configuration.auto_start:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                log.debug("No running event loop; tests start on run_tests()")
                return
            loop.call_soon(self.run_tests)

    def add_test(
        self, test: unittest.TestCase, description: Optional[str] = None
    ) -> TestCase:
        """Register a unittest case. Descriptions default to the test id."""
        self.ensure_initialized()
        description = description or test.id()
        if description in self._descriptions:
            raise ValueError(f"Duplicate test description: {description}")

        case = TestCase(description=description, test=test)
        self._descriptions.add(description)
        self._cases.append(case)
        return case

    def add_tests(self, suite: unittest.TestSuite) -> list[TestCase]:
        """Register every test in a (possibly nested) suite."""
        return [self.add_test(test) for test in _iter_tests(suite)]

    def test(self, description: str, func: Callable[[], None]) -> TestCase:
        """Register a plain function as a test case."""
        return self.add_test(
            unittest.FunctionTestCase(func, description=description), description
        )

    def filter_tests(self, predicate: Callable[[TestCase], bool]) -> None:
        """Disable every case the predicate rejects."""
        self.ensure_initialized()
        for case in self._cases:
            if case.enabled and not predicate(case):
                case.enabled = False

    def log_message(self, message: str) -> None:
        """Send a message to the configuration, tagged with the running case."""
        self._configuration.on_log_message(self._current, message)

    def run_tests(self) -> None:
        """Run every enabled case and report through the configuration."""
        if self._running:
            raise RuntimeError("Tests are already running")
        self.ensure_initialized()
        self._running = True

        try:
            cases = self.enabled_cases
            for case in cases:
                case.reset()

            config = self._configuration
            config.on_start()

            result = _ObservingResult(self, cases)
            unittest.TestSuite(case.test for case in cases).run(result)

            results = [case for case in cases if case.result is not None]
            passed = sum(1 for case in results if case.result == Outcome.PASS)
            failed = sum(1 for case in results if case.result == Outcome.FAIL)
            errors = sum(1 for case in results if case.result == Outcome.ERROR)
            uncaught_error = "\n".join(result.uncaught_errors) or None

            config.on_summary(passed, failed, errors, results, uncaught_error)
            config.on_done(failed == 0 and errors == 0 and uncaught_error is None)
        finally:
            self._current = None
            self._running = False

    def _begin(self, case: TestCase) -> None:
        self._current = case
        self._configuration.on_test_start(case)

    def _end(self) -> None:
        self._current = None

    def _report(
        self,
        case: TestCase,
        outcome: Outcome,
        message: str,
        stack_trace: Optional[str],
        running_time: timedelta,
    ) -> None:
        changed = case.result is not None
        case.result = outcome
        case.message = message
        case.stack_trace = stack_trace
        case.running_time = running_time

        if changed:
            self._configuration.on_test_result_changed(case)
        else:
            self._configuration.on_test_result(case)

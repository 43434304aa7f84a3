"""Task that lists or runs registered unit tests."""

import asyncio
import inspect
import threading
from typing import Callable, Optional

import click

from unittask.core.completion import CompletionSignal
from unittask.core.filtering import FilterSpec
from unittask.core.observer import TaskTestConfiguration
from unittask.core.summary import SummaryMode, SummaryOptions
from unittask.framework import get_default_framework
from unittask.framework.runner import TestFramework
from unittask.host.context import TaskContext
from unittask.host.task import Task, TaskArgument

LIST_FLAG = "list"
SUMMARY_FLAG = "summary"
FILTER_ARG = "filter"

DEFAULT_TIMEOUT_SECONDS = 20.0


def _settle(future: asyncio.Future, error: Optional[BaseException]) -> None:
    if future.cancelled():
        return
    if error is None:
        future.set_result(None)
    else:
        future.set_exception(error)


async def _run_in_background(framework: TestFramework, signal: CompletionSignal):
    """Run the suite on a worker thread and wait for the run's result.

    The event loop stays free while tests execute, so a timeout around this
    coroutine bounds the run itself. A test that never returns leaves its
    daemon thread behind instead of blocking interpreter exit.
    """
    loop = asyncio.get_running_loop()
    finished = loop.create_future()

    def work() -> None:
        error = None
        try:
            framework.run_tests()
        except Exception as e:
            error = e
        if not loop.is_closed():
            loop.call_soon_threadsafe(_settle, finished, error)

    threading.Thread(target=work, name="unittask-tests", daemon=True).start()
    await finished
    return await signal.wait()


def _is_legacy_action(action: Callable) -> bool:
    """Check for the deprecated form that takes the configuration as an argument."""
    try:
        parameters = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
        for param in parameters
    )


def _unit_test_options() -> list[click.Option]:
    return [
        click.Option(
            ["--list", "-l", LIST_FLAG],
            is_flag=True,
            default=False,
            help="Just list the test case names. Don't run them. Any filter is still applied.",
        ),
        click.Option(
            ["--summary", "-s", SUMMARY_FLAG],
            type=click.Choice([mode.value for mode in SummaryMode]),
            default=None,
            help="Summarize the results of individual tests.",
        ),
    ]


def create_unit_test_task(
    unit_test_action: Callable,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    framework: Optional[TestFramework] = None,
) -> Task:
    """Create a task that runs the unit tests registered by ``unit_test_action``.

    Args:
        unit_test_action: Routine that registers test cases with the
            framework. It should take no arguments; the form taking the
            framework configuration is deprecated.
        timeout: Seconds the runner waits for the run to finish.
        framework: Framework to configure and run (default: the process-wide
            framework).

    Returns:
        A Task accepting ``--list``, ``--summary`` and positional filter terms.
    """

    def body(ctx: TaskContext):
        target = framework or get_default_framework()

        summary = SummaryOptions.from_mode(ctx.arguments.get(SUMMARY_FLAG))
        filter_spec = FilterSpec.from_terms(ctx.extended_args.get(FILTER_ARG))
        signal = CompletionSignal()

        config = TaskTestConfiguration(ctx, summary, signal)
        target.configuration = config

        if _is_legacy_action(unit_test_action):
            ctx.warning(
                'The "unit_test_action" argument to create_unit_test_task has changed.'
            )
            ctx.warning('Change "unit_test_action" to take no arguments.')
            unit_test_action(config)
        else:
            unit_test_action()

        if filter_spec:
            ctx.info(f"Filtering tests by: {filter_spec}")
            target.filter_tests(filter_spec.predicate())

        if ctx.arguments.get(LIST_FLAG):
            descriptions = sorted(case.description for case in target.enabled_cases)
            ctx.info("\n".join(["Test cases:", *descriptions]))
            return None

        return _run_in_background(target, signal)

    return Task(
        body,
        description="Run unit tests in the console",
        options=_unit_test_options(),
        extended_args=[TaskArgument(FILTER_ARG, multiple=True)],
        timeout=timeout,
    )

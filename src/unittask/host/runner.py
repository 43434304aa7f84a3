"""Named task registry and click integration."""

import asyncio
import inspect
import logging
import sys
from typing import Optional

import click

from unittask.host.context import TaskContext
from unittask.host.task import Task, TaskResult
from unittask.logs import ROOT_LOGGER

log = logging.getLogger(__name__)


class TaskRunner:
    """Registers tasks by name and runs them to a single TaskResult."""

    def __init__(self, timeout: Optional[float] = None):
        """Initialize the runner.

        Args:
            timeout: Seconds to wait for any asynchronous task result. When
                set, overrides the timeout declared by each task.
        """
        self.timeout = timeout
        self._tasks: dict[str, Task] = {}

    @property
    def tasks(self) -> dict[str, Task]:
        return dict(self._tasks)

    def add_task(self, name: str, task: Task) -> None:
        """Register a task under a unique name."""
        if not name or not name.strip():
            raise ValueError("Task name cannot be empty")
        if name in self._tasks:
            raise ValueError(f"A task named '{name}' is already registered")
        self._tasks[name] = task

    def get_task(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise KeyError(f"No task named '{name}'") from None

    def create_context(self, name: str, **values) -> TaskContext:
        """Build the context for a task from parsed command-line values."""
        task = self.get_task(name)
        arguments = {opt.name: values.get(opt.name) for opt in task.options}
        extended_args = {
            arg.name: values.get(arg.name) or (() if arg.multiple else None)
            for arg in task.extended_args
        }
        return TaskContext(
            logging.getLogger(f"{ROOT_LOGGER}.{name}"),
            arguments=arguments,
            extended_args=extended_args,
        )

    async def run_task(self, name: str, ctx: TaskContext) -> TaskResult:
        """Run a task body and wait for its result.

        Returns:
            The task's TaskResult. A body returning None succeeded; an
            awaitable that does not finish within the timeout is a failure.
        """
        task = self.get_task(name)
        log.debug("Running task %s", name)

        outcome = task.body(ctx)
        if inspect.isawaitable(outcome):
            timeout = self.timeout if self.timeout is not None else task.timeout
            try:
                outcome = await asyncio.wait_for(outcome, timeout)
            except asyncio.TimeoutError:
                return TaskResult.failure(
                    f"Task '{name}' did not finish within {timeout:g} seconds"
                )

        if outcome is None:
            return TaskResult.ok()
        if isinstance(outcome, TaskResult):
            return outcome
        raise TypeError(
            f"Task '{name}' produced {type(outcome).__name__}, expected a TaskResult"
        )

    def attach(self, group: click.Group) -> click.Group:
        """Add one command per registered task to a click group."""
        for name, task in self._tasks.items():
            group.add_command(self._make_command(name, task))
        return group

    def _make_command(self, name: str, task: Task) -> click.Command:
        def callback(**values) -> None:
            ctx = self.create_context(name, **values)
            try:
                result = asyncio.run(self.run_task(name, ctx))
            except Exception:
                ctx.logger.exception("Task '%s' raised an error", name)
                sys.exit(1)

            if not result.success:
                ctx.severe(result.reason or f"Task '{name}' failed")
                sys.exit(1)

        return click.Command(
            name,
            callback=callback,
            params=task.params(),
            help=task.description,
        )

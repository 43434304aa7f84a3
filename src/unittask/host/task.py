"""Task definitions consumed by the task runner."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import click


@dataclass(frozen=True)
class TaskResult:
    """Outcome of a task: success, or failure with a readable reason."""

    success: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "TaskResult":
        return cls(success=True)

    @classmethod
    def failure(cls, reason: str) -> "TaskResult":
        return cls(success=False, reason=reason)


@dataclass(frozen=True)
class TaskArgument:
    """A positional argument collected after a task's options."""

    name: str
    multiple: bool = False

    def to_click(self) -> click.Argument:
        if self.multiple:
            return click.Argument([self.name], nargs=-1)
        return click.Argument([self.name], required=False)


@dataclass
class Task:
    """A named unit of work the runner can invoke.

    ``body`` receives a TaskContext and returns either None (done, success),
    a TaskResult, or an awaitable resolving to one of those.
    """

    body: Callable[[Any], Any]
    description: str = ""
    options: list[click.Option] = field(default_factory=list)
    extended_args: list[TaskArgument] = field(default_factory=list)
    timeout: Optional[float] = None

    def params(self) -> list[click.Parameter]:
        """All click parameters for this task, options first."""
        return [*self.options, *(arg.to_click() for arg in self.extended_args)]

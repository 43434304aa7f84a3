"""Task hosting: named tasks, their contexts and results."""

from unittask.host.context import TaskContext
from unittask.host.runner import TaskRunner
from unittask.host.task import Task, TaskArgument, TaskResult

__all__ = ["Task", "TaskArgument", "TaskContext", "TaskResult", "TaskRunner"]

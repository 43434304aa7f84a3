"""Diagnostic sink handed to a running task."""

import logging
from typing import Any, Mapping, Optional, Sequence

from unittask.logs import CONFIG, TRACE


class TaskContext:
    """Logging facade and parsed arguments for one task invocation."""

    def __init__(
        self,
        logger: logging.Logger,
        arguments: Optional[Mapping[str, Any]] = None,
        extended_args: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self.logger = logger
        self.arguments = dict(arguments or {})
        self.extended_args = dict(extended_args or {})

    @property
    def name(self) -> str:
        return self.logger.name

    def trace(self, message: str) -> None:
        self.logger.log(TRACE, message)

    def config(self, message: str) -> None:
        self.logger.log(CONFIG, message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def severe(self, message: str) -> None:
        self.logger.error(message)

    def get_sub_logger(self, name: str) -> "TaskContext":
        """Return a context whose records are scoped under ``name``."""
        return TaskContext(
            self.logger.getChild(name),
            arguments=self.arguments,
            extended_args=self.extended_args,
        )

    def __repr__(self) -> str:
        return f"TaskContext({self.name!r})"

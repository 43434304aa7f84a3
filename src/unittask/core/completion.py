"""Write-once completion handle for a test run."""

import asyncio
from typing import Optional

from unittask.host.task import TaskResult


def _current_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class CompletionSignal:
    """Holds the result of a run; resolved exactly once, read any number of times.

    Resolving a second time is a programming error and raises
    ``asyncio.InvalidStateError``, as ``asyncio.Future.set_result`` does.
    A signal created inside a running event loop may be resolved from another
    thread; waiters are woken on the loop that created it.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._loop = _current_loop()
        self._result: Optional[TaskResult] = None

    @property
    def is_resolved(self) -> bool:
        return self._result is not None

    def resolve(self, result: TaskResult) -> None:
        if self._result is not None:
            raise asyncio.InvalidStateError(
                f"Completion signal already resolved with {self._result}"
            )
        self._result = result

        if self._loop is None or _current_loop() is self._loop:
            self._event.set()
        elif not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._event.set)

    def succeed(self) -> None:
        self.resolve(TaskResult.ok())

    def fail(self, reason: str) -> None:
        self.resolve(TaskResult.failure(reason))

    def result(self) -> TaskResult:
        """Return the resolved result without waiting."""
        if self._result is None:
            raise asyncio.InvalidStateError("Completion signal is not resolved yet")
        return self._result

    async def wait(self) -> TaskResult:
        """Suspend until the signal is resolved, then return its result."""
        await self._event.wait()
        return self.result()

"""Tracking for in-flight transport attempts scheduled on the event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class TaskManager:
    """Hold references to submission tasks until they finish.

    The event loop only keeps weak references to tasks, so a sender that
    fires off a transport attempt must keep it alive here. Finished tasks
    drop out on their own; an exception that escapes one is logged.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def add(self, task: asyncio.Task[Any]) -> asyncio.Task[Any]:
        """Track ``task`` until it completes and return it."""
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(self._log_exception)
        return task

    def _log_exception(self, task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning(
                "task.exception",
                extra={
                    "event": "task.exception",
                    "task_name": task.get_name(),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    def pending(self) -> int:
        """Return how many tracked tasks have not finished yet."""
        return sum(1 for task in self._tasks if not task.done())

    async def await_all(self) -> None:
        """Wait for every tracked task to finish.

        Cancelling the caller does not cancel the tracked tasks.
        """
        pending = [task for task in self._tasks if not task.done()]
        if pending:
            await asyncio.wait(pending)

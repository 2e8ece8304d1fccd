from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable


@dataclass(slots=True)
class BackgroundTask:
    """Handle on a coroutine scheduled on the current loop; awaitable."""

    task: asyncio.Future[Any]

    def cancel(self) -> None:
        self.task.cancel()

    def done(self) -> bool:
        return self.task.done()

    def __await__(self):
        return self.task.__await__()


def run_background(coro: Awaitable[object]) -> BackgroundTask:
    """Schedule ``coro`` without awaiting it (palette reloads, Qt-triggered executions)."""

    return BackgroundTask(asyncio.ensure_future(coro))


__all__ = ["BackgroundTask", "run_background"]

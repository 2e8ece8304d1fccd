from __future__ import annotations

import asyncio

import pytest

from toorker.utils import call_later, run_background


@pytest.mark.asyncio
async def test_run_background_schedules_coroutine() -> None:
    async def compute() -> int:
        await asyncio.sleep(0)
        return 7

    task = run_background(compute())

    assert await task == 7
    assert task.done()


@pytest.mark.asyncio
async def test_background_task_can_be_cancelled() -> None:
    task = run_background(asyncio.sleep(10))

    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_call_later_fires_and_cancels() -> None:
    fired: list[str] = []

    call_later(0, lambda: fired.append("kept"))
    cancel = call_later(0, lambda: fired.append("dropped"))
    cancel()
    await asyncio.sleep(0.01)

    assert fired == ["kept"]

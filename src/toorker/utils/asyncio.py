from __future__ import annotations

import asyncio
from typing import Callable


def call_later(delay: float, func: Callable[[], None]) -> Callable[[], None]:
    """Schedule ``func`` on the running loop and return a canceller."""

    loop = asyncio.get_event_loop()
    handler = loop.call_later(delay, func)
    return handler.cancel


__all__ = ["call_later"]

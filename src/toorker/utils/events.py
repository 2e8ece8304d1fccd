from __future__ import annotations

from typing import Callable, Generic, TypeVar

from .logging import get_logger


logger = get_logger(__name__)

PayloadT = TypeVar("PayloadT")
Listener = Callable[[PayloadT], None]


class EventHook(Generic[PayloadT]):
    """Synchronous listener list; a failing listener is logged and skipped."""

    def __init__(self, name: str = "event") -> None:
        self.name = name
        self._listeners: list[Listener[PayloadT]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener[PayloadT]) -> Callable[[], None]:
        """Register ``listener``; the returned callable detaches it (idempotent)."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, payload: PayloadT) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(payload)
            except Exception:  # noqa: BLE001 - one listener must not starve the rest
                logger.exception("Event listener failed", hook=self.name)

    def clear(self) -> None:
        self._listeners.clear()


__all__ = ["EventHook"]

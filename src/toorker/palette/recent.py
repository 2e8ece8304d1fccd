from __future__ import annotations

from .types import Action


DEFAULT_CAPACITY = 10


class RecentActions:
    """Bounded most-recent-first history of executed non-smart actions."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = max(1, capacity)
        self._actions: tuple[Action, ...] = ()

    @property
    def capacity(self) -> int:
        return self._capacity

    def add_recent(self, action: Action) -> None:
        if action.is_smart:
            return
        remaining = tuple(item for item in self._actions if item.id != action.id)
        self._actions = ((action.as_recent(),) + remaining)[: self._capacity]

    def actions(self) -> list[Action]:
        return list(self._actions)

    def clear(self) -> None:
        self._actions = ()

    def __len__(self) -> int:
        return len(self._actions)


__all__ = ["RecentActions", "DEFAULT_CAPACITY"]

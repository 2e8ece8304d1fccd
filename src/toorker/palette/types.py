from __future__ import annotations

import inspect
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Awaitable, Callable


ActionCallback = Callable[[], object | Awaitable[object] | None]

INSTANT_SECTION = "Instant"
RECENT_SECTION = "Recent"


class ActionKind(StrEnum):
    NAVIGATE = "navigate"
    PORT_ACTION = "port-action"
    COMMAND = "command"
    RECENT = "recent"
    SMART = "smart"


class FeedbackKind(StrEnum):
    COPIED = "copied"
    DONE = "done"


async def _noop() -> None:
    return None


@dataclass(frozen=True, slots=True)
class Action:
    """A single selectable, executable palette entry."""

    id: str
    kind: ActionKind
    label: str
    description: str
    icon: str
    section: str
    keywords: tuple[str, ...] = ()
    shortcut: str | None = None
    result: str | None = None
    execute: ActionCallback = field(default=_noop, compare=False, repr=False)

    @property
    def is_smart(self) -> bool:
        return self.kind is ActionKind.SMART

    async def run(self) -> None:
        """Invoke ``execute``, awaiting it when it returns an awaitable."""
        outcome = self.execute()
        if inspect.isawaitable(outcome):
            await outcome

    def as_recent(self) -> Action:
        return replace(self, kind=ActionKind.RECENT, section=RECENT_SECTION)


@dataclass(frozen=True, slots=True)
class Section:
    title: str
    actions: tuple[Action, ...]


@dataclass(frozen=True, slots=True)
class Feedback:
    action_id: str
    kind: FeedbackKind

    @property
    def message(self) -> str:
        if self.kind is FeedbackKind.COPIED:
            return "Copied to clipboard"
        return "Done"


__all__ = [
    "INSTANT_SECTION",
    "RECENT_SECTION",
    "Action",
    "ActionCallback",
    "ActionKind",
    "Feedback",
    "FeedbackKind",
    "Section",
]

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from toorker.utils import get_logger

from ..services import PaletteServices
from ..types import INSTANT_SECTION, Action, ActionCallback, ActionKind


logger = get_logger(__name__)

MAX_COUNT = 10

_GEN_ONLY = re.compile(r"^gen(erate)?$", re.IGNORECASE)
_GEN_PREFIX = re.compile(r"^gen(?:erate)?\s+", re.IGNORECASE)
_FIRST_NUMBER = re.compile(r"\b(\d+)\b")


def prefix_of(text: str, target: str) -> bool:
    """True when either string is a prefix of the other (``text`` needs 2+ chars)."""

    if len(text) < 2:
        return False
    return target.startswith(text) or text.startswith(target)


def starts_with_any(text: str, prefixes: Iterable[str]) -> bool:
    return any(prefix_of(text, prefix) for prefix in prefixes)


def matches_gen_prefix(text: str, keywords: Iterable[str]) -> bool:
    """Match ``gen``/``generate`` alone or followed by one of ``keywords``."""

    if _GEN_ONLY.match(text):
        return True
    remainder = _GEN_PREFIX.sub("", text, count=1)
    if remainder == text:
        return False
    return starts_with_any(remainder, keywords)


def parse_count(text: str, maximum: int = MAX_COUNT) -> int:
    match = _FIRST_NUMBER.search(text)
    if not match:
        return 1
    return max(1, min(int(match.group(1)), maximum))


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def copy_to_clipboard(services: PaletteServices, text: str) -> ActionCallback:
    clipboard = services.clipboard

    async def execute() -> None:
        await clipboard.write_text(text)

    return execute


def smart_action(
    action_id: str,
    label: str,
    description: str,
    icon: str,
    *,
    result: str | None = None,
    execute: ActionCallback | None = None,
    services: PaletteServices | None = None,
) -> Action:
    """Build an Instant action; with a ``result`` the default effect copies it."""

    if execute is None:
        if result is None or services is None:
            raise ValueError("smart actions need either a result to copy or an execute callback")
        execute = copy_to_clipboard(services, result)

    return Action(
        id=action_id,
        kind=ActionKind.SMART,
        label=label,
        description=description,
        icon=icon,
        section=INSTANT_SECTION,
        result=result,
        execute=execute,
    )


class IntentMatcher(ABC):
    """Recognises one mini-grammar and synthesises Instant actions for it."""

    name: str = "intent"

    @abstractmethod
    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        """Return actions for a fully recognised ``query`` or ``None``."""


class IntentMatcherChain:
    """Runs every matcher against a query and concatenates their actions."""

    def __init__(self, matchers: Sequence[IntentMatcher]) -> None:
        self._matchers = tuple(matchers)

    @property
    def matchers(self) -> tuple[IntentMatcher, ...]:
        return self._matchers

    def get_smart_actions(self, query: str, services: PaletteServices) -> list[Action]:
        text = query.strip()
        if not text:
            return []

        actions: list[Action] = []
        seen: set[str] = set()
        for matcher in self._matchers:
            try:
                produced = matcher.match(text, services)
            except Exception:  # noqa: BLE001 - one broken grammar must not hide the others
                logger.exception("Intent matcher failed", matcher=matcher.name)
                continue
            for action in produced or ():
                if action.id in seen:
                    continue
                seen.add(action.id)
                actions.append(action)
        return actions


__all__ = [
    "IntentMatcher",
    "IntentMatcherChain",
    "copy_to_clipboard",
    "matches_gen_prefix",
    "parse_count",
    "prefix_of",
    "smart_action",
    "starts_with_any",
    "truncate",
]

"""Palette state machine driving focus, query, selection and execution.

The controller owns the candidate snapshot, the recency list and the
transient feedback timer. Rendering is left to a host window that only needs
to hide itself and focus its input; everything else is observed through the
``changed`` hook.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Callable, Protocol, Sequence

from toorker.config.settings import Settings
from toorker.tools.registry import TOOLS, ToolDefinition
from toorker.utils import (
    BackgroundTask,
    ErrorDescriptor,
    EventHook,
    call_later,
    describe_exception,
    get_logger,
    run_background,
)

from .intents import DEFAULT_CHAIN, IntentMatcherChain
from .recent import RecentActions
from .scoring import filter_actions, flatten_sections
from .services import PaletteServices
from .sources import gather_actions
from .types import INSTANT_SECTION, Action, Feedback, FeedbackKind, Section


logger = get_logger(__name__)

Scheduler = Callable[[float, Callable[[], None]], Callable[[], None]]


class PaletteState(StrEnum):
    IDLE = "idle"
    ACTIVE = "active"
    EXECUTING = "executing"
    FEEDBACK = "feedback"


class PaletteWindowHost(Protocol):
    def hide(self) -> None: ...

    def focus_input(self) -> None: ...


class PaletteController:
    """Quick launcher behaviour independent of any widget toolkit."""

    def __init__(
        self,
        window: PaletteWindowHost,
        services: PaletteServices,
        *,
        tools: Sequence[ToolDefinition] = TOOLS,
        recent: RecentActions | None = None,
        chain: IntentMatcherChain | None = None,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._window = window
        self._services = services
        self._tools = tuple(tools)
        self._settings = settings or Settings()
        self._recent = recent if recent is not None else RecentActions(self._settings.max_recent)
        self._chain = chain or DEFAULT_CHAIN
        self._scheduler = scheduler or call_later

        self._state = PaletteState.IDLE
        self._query = ""
        self._selected = 0
        self._candidates: list[Action] = []
        self._smart: list[Action] = []
        self._sections: list[Section] = []
        self._flat: list[Action] = []
        self._feedback: Feedback | None = None
        self._cancel_feedback: Callable[[], None] | None = None
        self._reload_generation = 0

        self.changed: EventHook[None] = EventHook("palette.changed")
        self.execution_failed: EventHook[ErrorDescriptor] = EventHook("palette.execution_failed")

    # ------------------------------------------------------------------ State

    @property
    def state(self) -> PaletteState:
        return self._state

    @property
    def query(self) -> str:
        return self._query

    @property
    def selected(self) -> int:
        return self._selected

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    @property
    def flat_actions(self) -> list[Action]:
        return list(self._flat)

    @property
    def candidates(self) -> list[Action]:
        return list(self._candidates)

    @property
    def feedback(self) -> Feedback | None:
        return self._feedback

    @property
    def recent(self) -> RecentActions:
        return self._recent

    @property
    def selected_action(self) -> Action | None:
        if 0 <= self._selected < len(self._flat):
            return self._flat[self._selected]
        return None

    # ------------------------------------------------------------- Lifecycle

    def on_focus(self) -> BackgroundTask:
        """Start a fresh session and reload candidates in the background."""

        self._clear_feedback()
        self._state = PaletteState.ACTIVE
        self._query = ""
        self._selected = 0
        self._refresh(rematch=True)
        task = run_background(self.reload_candidates())
        self._window.focus_input()
        self.changed.emit(None)
        return task

    async def reload_candidates(self) -> None:
        self._reload_generation += 1
        generation = self._reload_generation
        candidates = await gather_actions(
            self._recent.actions(),
            self._services,
            tools=self._tools,
            keybindings=self._settings.keybindings,
        )
        if generation != self._reload_generation:
            logger.debug("Discarding superseded candidate reload", generation=generation)
            return
        self._candidates = candidates
        logger.info("Palette candidates loaded", count=len(candidates))
        self._refresh(rematch=False)
        self.changed.emit(None)

    def on_blur(self) -> None:
        if self._state in (PaletteState.FEEDBACK, PaletteState.EXECUTING):
            return
        self._hide()

    def on_escape(self) -> None:
        self._hide()

    # ----------------------------------------------------------------- Input

    def set_query(self, text: str) -> None:
        if self._state is PaletteState.FEEDBACK:
            return
        self._query = text
        self._selected = 0
        self._feedback = None
        self._refresh(rematch=True)
        self.changed.emit(None)

    def move_selection(self, delta: int) -> None:
        if self._state is PaletteState.FEEDBACK:
            return
        self._selected = self._clamp(self._selected + delta)
        self.changed.emit(None)

    def select(self, index: int) -> None:
        if self._state is PaletteState.FEEDBACK:
            return
        clamped = self._clamp(index)
        if clamped != self._selected:
            self._selected = clamped
            self.changed.emit(None)

    async def execute_selected(self) -> None:
        await self.execute_at(self._selected)

    async def execute_at(self, index: int) -> None:
        if self._state in (PaletteState.FEEDBACK, PaletteState.EXECUTING):
            return
        if not 0 <= index < len(self._flat):
            return

        action = self._flat[index]
        self._selected = index
        self._state = PaletteState.EXECUTING
        self.changed.emit(None)
        logger.debug("Executing palette action", action_id=action.id, kind=str(action.kind))

        if not action.is_smart:
            self._recent.add_recent(action)
        try:
            await action.run()
        except Exception as exc:  # noqa: BLE001 - reported through execution_failed
            logger.exception("Palette action failed", action_id=action.id)
            self.execution_failed.emit(describe_exception(exc))
            self._hide()
            return

        if action.is_smart:
            self._enter_feedback(action)
        else:
            self._hide()

    # ------------------------------------------------------------- Internals

    def _refresh(self, *, rematch: bool) -> None:
        if rematch:
            self._smart = self._chain.get_smart_actions(self._query, self._services)
        sections: list[Section] = []
        if self._smart:
            sections.append(Section(title=INSTANT_SECTION, actions=tuple(self._smart)))
        sections.extend(filter_actions(self._candidates, self._query))
        self._sections = sections
        self._flat = flatten_sections(sections)
        self._selected = self._clamp(self._selected)

    def _clamp(self, index: int) -> int:
        if not self._flat:
            return 0
        return max(0, min(index, len(self._flat) - 1))

    def _enter_feedback(self, action: Action) -> None:
        kind = FeedbackKind.COPIED if action.result else FeedbackKind.DONE
        self._feedback = Feedback(action_id=action.id, kind=kind)
        self._state = PaletteState.FEEDBACK
        self._cancel_feedback = self._scheduler(self._settings.feedback_dwell_seconds, self._finish_feedback)
        self.changed.emit(None)

    def _finish_feedback(self) -> None:
        self._cancel_feedback = None
        if self._state is PaletteState.FEEDBACK:
            self._hide()

    def _clear_feedback(self) -> None:
        if self._cancel_feedback is not None:
            self._cancel_feedback()
            self._cancel_feedback = None
        self._feedback = None

    def _hide(self) -> None:
        self._clear_feedback()
        self._state = PaletteState.IDLE
        self._window.hide()
        self.changed.emit(None)


__all__ = ["PaletteController", "PaletteState", "PaletteWindowHost", "Scheduler"]

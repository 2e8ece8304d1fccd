from __future__ import annotations

import asyncio
import hashlib

import pytest

from tests.stubs import FakePortProvider, port_entry
from toorker.config import Settings
from toorker.palette import (
    INSTANT_SECTION,
    ActionKind,
    FeedbackKind,
    IntentMatcher,
    IntentMatcherChain,
    PaletteController,
    PaletteState,
)
from toorker.palette.intents.base import smart_action
from toorker.tools import TOOLS
from toorker.utils import ErrorDescriptor


class ExplodingMatcher(IntentMatcher):
    name = "explode"

    def match(self, query, services):
        if query != "boom":
            return None

        async def execute() -> None:
            raise PermissionError("operation not permitted")

        return [smart_action("smart-boom", "Boom", "always fails", "Hash", execute=execute)]


class GatedMatcher(IntentMatcher):
    name = "gated"

    def __init__(self) -> None:
        self.gate = asyncio.Event()

    def match(self, query, services):
        if query != "slow":
            return None

        async def execute() -> None:
            await self.gate.wait()

        return [smart_action("smart-slow", "Slow", "waits", "Clock", execute=execute)]


def _controller(window, services, scheduler, **kwargs) -> PaletteController:
    return PaletteController(window, services, scheduler=scheduler, **kwargs)


@pytest.mark.asyncio
async def test_focus_starts_session_and_loads_candidates(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    changes: list[None] = []
    controller.changed.subscribe(changes.append)

    task = controller.on_focus()
    assert controller.state is PaletteState.ACTIVE
    assert window.focused == 1
    await task

    assert len(controller.candidates) == 1 + len(TOOLS)
    assert len(controller.flat_actions) == 1 + len(TOOLS)
    assert controller.selected == 0
    assert changes


@pytest.mark.asyncio
async def test_focus_clears_previous_query_and_selection(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("json")
    controller.move_selection(1)

    await controller.on_focus()

    assert controller.query == ""
    assert controller.selected == 0
    assert controller.feedback is None


@pytest.mark.asyncio
async def test_instant_section_leads_the_results(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()

    controller.set_query("uuid")

    assert controller.sections[0].title == INSTANT_SECTION
    assert controller.flat_actions[0].id == "smart-uuid"
    assert any(action.id == "nav-uuid-generator" for action in controller.flat_actions)


@pytest.mark.asyncio
async def test_query_change_resets_selection(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.move_selection(4)

    controller.set_query("e")

    assert controller.selected == 0


@pytest.mark.asyncio
async def test_selection_is_clamped_when_results_shrink(window, services, scheduler) -> None:
    services.ports = FakePortProvider([port_entry(3000), port_entry(8080)])
    controller = _controller(window, services, scheduler, tools=TOOLS[:2])
    await controller.on_focus()
    assert len(controller.flat_actions) == 9
    controller.select(5)
    assert controller.selected == 5

    services.ports.entries = []
    await controller.reload_candidates()

    assert len(controller.flat_actions) == 3
    assert controller.selected == 2


@pytest.mark.asyncio
async def test_move_selection_stays_in_bounds(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler, tools=TOOLS[:3])
    await controller.on_focus()

    controller.move_selection(-1)
    assert controller.selected == 0
    controller.move_selection(100)
    assert controller.selected == 3


def test_selection_on_empty_results_is_zero(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)

    controller.set_query("zzzzqqq")
    controller.move_selection(3)

    assert controller.flat_actions == []
    assert controller.selected == 0
    assert controller.selected_action is None


@pytest.mark.asyncio
async def test_non_smart_execution_records_recent_and_hides(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("base64")
    target = controller.selected_action
    assert target is not None and target.kind is ActionKind.NAVIGATE

    await controller.execute_selected()

    assert services.navigator.selections[-1].tool_id == target.id.removeprefix("nav-")
    assert [item.id for item in controller.recent.actions()] == [target.id]
    assert controller.state is PaletteState.IDLE
    assert controller.feedback is None
    assert window.hidden == 1
    assert scheduler.calls == []


@pytest.mark.asyncio
async def test_recent_actions_join_the_next_session(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("regex")
    await controller.execute_selected()

    await controller.on_focus()

    assert controller.candidates[-1].kind is ActionKind.RECENT
    assert controller.candidates[-1].id == "nav-regex-tester"


@pytest.mark.asyncio
async def test_smart_execution_enters_feedback_until_dwell_elapses(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("uuid")

    await controller.execute_selected()

    assert controller.state is PaletteState.FEEDBACK
    assert controller.feedback is not None
    assert controller.feedback.action_id == "smart-uuid"
    assert controller.feedback.kind is FeedbackKind.COPIED
    assert len(services.clipboard.writes) == 1
    assert len(controller.recent) == 0
    assert [call.delay for call in scheduler.pending] == [pytest.approx(0.9)]
    assert window.hidden == 0

    controller.on_blur()
    controller.set_query("json")
    controller.move_selection(1)
    assert window.hidden == 0
    assert controller.query == "uuid"
    assert controller.selected == 0

    scheduler.fire_all()

    assert controller.state is PaletteState.IDLE
    assert controller.feedback is None
    assert window.hidden == 1


@pytest.mark.asyncio
async def test_smart_action_without_result_reports_done(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("hash hello")

    await controller.execute_selected()

    assert controller.feedback is not None
    assert controller.feedback.kind is FeedbackKind.DONE
    assert controller.feedback.message == "Done"
    assert services.clipboard.writes == [hashlib.sha256(b"hello").hexdigest()]


@pytest.mark.asyncio
async def test_feedback_dwell_comes_from_settings(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler, settings=Settings(feedback_dwell_ms=250))
    await controller.on_focus()
    controller.set_query("= 1+1")

    await controller.execute_selected()

    assert scheduler.pending[0].delay == pytest.approx(0.25)


@pytest.mark.asyncio
async def test_escape_cancels_feedback_and_hides(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()
    controller.set_query("uuid")
    await controller.execute_selected()

    controller.on_escape()

    assert scheduler.pending == []
    assert controller.state is PaletteState.IDLE
    assert controller.feedback is None
    assert window.hidden == 1


@pytest.mark.asyncio
async def test_blur_while_active_hides(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()

    controller.on_blur()

    assert controller.state is PaletteState.IDLE
    assert window.hidden == 1


@pytest.mark.asyncio
async def test_blur_is_ignored_while_executing(window, services, scheduler) -> None:
    gated = GatedMatcher()
    controller = _controller(window, services, scheduler, chain=IntentMatcherChain([gated]))
    await controller.on_focus()
    controller.set_query("slow")

    running = asyncio.ensure_future(controller.execute_selected())
    await asyncio.sleep(0)
    assert controller.state is PaletteState.EXECUTING
    controller.on_blur()
    assert window.hidden == 0

    gated.gate.set()
    await running
    assert controller.state is PaletteState.FEEDBACK


@pytest.mark.asyncio
async def test_execution_failure_is_reported_without_feedback(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler, chain=IntentMatcherChain([ExplodingMatcher()]))
    failures: list[ErrorDescriptor] = []
    controller.execution_failed.subscribe(failures.append)
    await controller.on_focus()
    controller.set_query("boom")

    await controller.execute_selected()

    assert len(failures) == 1
    assert "PermissionError" in failures[0].detail
    assert controller.feedback is None
    assert controller.state is PaletteState.IDLE
    assert scheduler.calls == []
    assert window.hidden == 1


@pytest.mark.asyncio
async def test_execute_at_ignores_out_of_range_indices(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()

    await controller.execute_at(10_000)

    assert controller.state is PaletteState.ACTIVE
    assert window.hidden == 0


@pytest.mark.asyncio
async def test_same_query_yields_same_ordering(window, services, scheduler) -> None:
    controller = _controller(window, services, scheduler)
    await controller.on_focus()

    controller.set_query("json")
    first = [action.id for action in controller.flat_actions]
    controller.set_query("json")
    second = [action.id for action in controller.flat_actions]

    assert first == second

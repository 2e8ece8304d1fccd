from __future__ import annotations

from toorker.palette.intents import DEFAULT_MATCHERS, IntentMatcher, IntentMatcherChain, get_smart_actions
from toorker.palette.intents.base import smart_action
from toorker.palette.types import INSTANT_SECTION, ActionKind


class StaticMatcher(IntentMatcher):
    def __init__(self, name: str, *action_ids: str) -> None:
        self.name = name
        self._ids = action_ids

    def match(self, query, services):
        if not self._ids:
            return None
        return [smart_action(action_id, self.name, query, "Zap", result=query, services=services) for action_id in self._ids]


class BrokenMatcher(IntentMatcher):
    name = "broken"

    def match(self, query, services):
        raise RuntimeError("grammar exploded")


def test_blank_query_yields_nothing(services) -> None:
    chain = IntentMatcherChain([StaticMatcher("a", "smart-a")])

    assert chain.get_smart_actions("   ", services) == []


def test_actions_follow_matcher_order(services) -> None:
    chain = IntentMatcherChain(
        [StaticMatcher("first", "smart-1"), StaticMatcher("none"), StaticMatcher("second", "smart-2", "smart-3")]
    )

    actions = chain.get_smart_actions("query", services)

    assert [action.id for action in actions] == ["smart-1", "smart-2", "smart-3"]
    assert all(action.kind is ActionKind.SMART for action in actions)
    assert all(action.section == INSTANT_SECTION for action in actions)


def test_duplicate_ids_keep_the_first_producer(services) -> None:
    chain = IntentMatcherChain([StaticMatcher("first", "smart-x"), StaticMatcher("second", "smart-x")])

    actions = chain.get_smart_actions("query", services)

    assert len(actions) == 1
    assert actions[0].label == "first"


def test_failing_matcher_does_not_hide_the_rest(services) -> None:
    chain = IntentMatcherChain([BrokenMatcher(), StaticMatcher("ok", "smart-ok")])

    actions = chain.get_smart_actions("query", services)

    assert [action.id for action in actions] == ["smart-ok"]


def test_query_is_trimmed_before_matching(services) -> None:
    chain = IntentMatcherChain([StaticMatcher("echo", "smart-echo")])

    actions = chain.get_smart_actions("  padded  ", services)

    assert actions[0].result == "padded"


def test_default_chain_evaluates_calculations(services) -> None:
    actions = get_smart_actions("= 6*7", services)

    assert [action.id for action in actions] == ["smart-calc"]
    assert actions[0].result == "42"


def test_default_matchers_are_uniquely_named() -> None:
    names = [matcher.name for matcher in DEFAULT_MATCHERS]

    assert len(names) == len(set(names))


def test_plain_words_produce_no_instant_actions(services) -> None:
    assert get_smart_actions("settings", services) == []

"""Fuzzy scoring and ranking of palette actions.

Contiguous substring hits always score at least 100; subsequence-only hits
stay below that, rewarding clustered and word-initial characters.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .types import Action, Section


SUBSTRING_BASE = 100
SUBSTRING_COVERAGE_WEIGHT = 50
CHAR_SCORE = 10
CONTIGUOUS_BONUS = 5
WORD_BOUNDARY_BONUS = 8
SUBSEQUENCE_CEILING = SUBSTRING_BASE - 1
LABEL_WEIGHT = 2
_BOUNDARY_CHARS = (" ", "-")


def fuzzy_score(query: str, target: str) -> float:
    """Score how well ``query`` matches ``target``; 0 means no match.

    Callers special-case the empty query before calling this.
    """

    q = query.lower()
    t = target.lower()
    if not q or not t:
        return 0

    if q in t:
        return SUBSTRING_BASE + (len(q) / len(t)) * SUBSTRING_COVERAGE_WEIGHT

    qi = 0
    score = 0
    last_match = -1
    for index, char in enumerate(t):
        if qi >= len(q):
            break
        if char != q[qi]:
            continue
        score += CHAR_SCORE
        if last_match == index - 1:
            score += CONTIGUOUS_BONUS
        if index == 0 or t[index - 1] in _BOUNDARY_CHARS:
            score += WORD_BOUNDARY_BONUS
        last_match = index
        qi += 1

    if qi != len(q):
        return 0
    return min(score, SUBSEQUENCE_CEILING)


def score_action(action: Action, query: str) -> float:
    if not query:
        return 1

    label_score = fuzzy_score(query, action.label) * LABEL_WEIGHT
    description_score = fuzzy_score(query, action.description)
    keyword_score = max((fuzzy_score(query, keyword) for keyword in action.keywords), default=0)
    return max(label_score, description_score, keyword_score)


def filter_actions(actions: Iterable[Action], query: str) -> list[Section]:
    """Rank ``actions`` against ``query`` and group them into sections.

    Sections appear in the order their best-ranked action appears.
    """

    scored = [(action, score_action(action, query)) for action in actions]
    matching = [entry for entry in scored if entry[1] > 0]
    # list.sort is stable, so ties keep candidate order
    matching.sort(key=lambda entry: entry[1], reverse=True)

    grouped: dict[str, list[Action]] = {}
    for action, _ in matching:
        grouped.setdefault(action.section, []).append(action)
    return [Section(title=title, actions=tuple(items)) for title, items in grouped.items()]


def flatten_sections(sections: Sequence[Section]) -> list[Action]:
    return [action for section in sections for action in section.actions]


__all__ = ["filter_actions", "flatten_sections", "fuzzy_score", "score_action"]

from __future__ import annotations

import json
import re
from datetime import datetime, timezone

import pytest

from toorker.palette.intents.generators import (
    PASSWORD_CHARSETS,
    JsonSampleMatcher,
    LoremMatcher,
    PasswordMatcher,
    RandomNumberMatcher,
    UuidMatcher,
    iso_timestamp,
)

UUID_V4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def _single(actions):
    assert actions is not None
    assert len(actions) == 1
    return actions[0]


def test_uuid_yields_one_v4_identifier(services) -> None:
    action = _single(UuidMatcher().match("uuid", services))

    assert action.id == "smart-uuid"
    assert action.label == "Generate UUID"
    assert UUID_V4.match(action.result)


@pytest.mark.parametrize("query", ["5 uuid", "gen 5 uuid", "uuid 5", "generate 5 guid"])
def test_uuid_count_forms(services, query: str) -> None:
    action = _single(UuidMatcher().match(query, services))

    values = action.result.split("\n")
    assert len(values) == 5
    assert len(set(values)) == 5
    assert all(UUID_V4.match(value) for value in values)
    assert action.label == "Generate 5 UUIDs"


def test_uuid_count_is_capped(services) -> None:
    action = _single(UuidMatcher().match("uuid 50", services))

    assert len(action.result.split("\n")) == 10


@pytest.mark.parametrize("query", ["u", "hello", "json", "id"])
def test_uuid_ignores_other_text(services, query: str) -> None:
    assert UuidMatcher().match(query, services) is None


@pytest.mark.asyncio
async def test_uuid_execute_copies_result(services) -> None:
    action = _single(UuidMatcher().match("uuid", services))

    await action.run()

    assert services.clipboard.writes == [action.result]


def test_password_defaults_to_twenty_characters(services) -> None:
    action = _single(PasswordMatcher().match("password", services))

    assert action.id == "smart-password"
    assert len(action.result) == 20
    assert set(action.result) <= set(PASSWORD_CHARSETS["all"])


def test_strong_password_is_longer(services) -> None:
    action = _single(PasswordMatcher().match("strong password", services))

    assert len(action.result) == 32
    assert action.label == "Generate Strong password"


@pytest.mark.parametrize(
    ("query", "charset"),
    [
        ("pin password 6", "number"),
        ("gen alphanum", "alphanumeric"),
        ("alpha password", "alpha"),
        ("simple pw", "simple"),
    ],
)
def test_password_modifiers_pick_charset(services, query: str, charset: str) -> None:
    action = _single(PasswordMatcher().match(query, services))

    assert set(action.result) <= set(PASSWORD_CHARSETS[charset])


def test_password_length_and_count(services) -> None:
    action = _single(PasswordMatcher().match("3 pw 12", services))

    passwords = action.result.split("\n")
    assert len(passwords) == 3
    assert all(len(password) == 12 for password in passwords)


def test_password_length_out_of_range_keeps_default(services) -> None:
    action = _single(PasswordMatcher().match("password 2", services))

    assert len(action.result) == 20


@pytest.mark.parametrize("query", ["strong", "simple", "pinterest"])
def test_lone_modifier_is_not_a_password_query(services, query: str) -> None:
    assert PasswordMatcher().match(query, services) is None


@pytest.mark.parametrize("query", ["strong pass", "passport photo", "gen strong"])
def test_password_word_or_gen_prefix_triggers(services, query: str) -> None:
    assert PasswordMatcher().match(query, services) is not None


def test_lorem_defaults_to_one_paragraph(services) -> None:
    action = _single(LoremMatcher().match("lorem", services))

    assert action.id == "smart-lorem"
    assert "\n\n" not in action.result
    assert action.result.endswith(".")


def test_lorem_words_and_corpus(services) -> None:
    action = _single(LoremMatcher().match("lorem 7 words tech", services))

    words = action.result.split(" ")
    assert len(words) == 7
    assert "(tech)" in action.description


def test_lorem_paragraph_count(services) -> None:
    action = _single(LoremMatcher().match("lorem 3", services))

    assert len(action.result.split("\n\n")) == 3


def test_json_sample_single_object(services) -> None:
    action = _single(JsonSampleMatcher().match("json", services))

    payload = json.loads(action.result)
    assert set(payload) == {"id", "name", "active", "value", "created"}
    assert action.label == "Generate JSON"


def test_json_sample_array(services) -> None:
    action = _single(JsonSampleMatcher().match("gen json 3", services))

    payload = json.loads(action.result)
    assert isinstance(payload, list)
    assert len(payload) == 3


def test_random_number_in_range(services) -> None:
    for _ in range(20):
        action = _single(RandomNumberMatcher().match("random 5 10", services))
        assert 5 <= int(action.result) <= 10


def test_random_range_needs_min_below_max(services) -> None:
    assert RandomNumberMatcher().match("rand 10 10", services) is None


def test_bare_random_number(services) -> None:
    action = _single(RandomNumberMatcher().match("rand", services))

    assert 0 <= int(action.result) < 1_000_000


def test_random_color(services) -> None:
    action = _single(RandomNumberMatcher().match("random colour", services))

    assert action.id == "smart-rand-color"
    assert re.fullmatch(r"#[0-9A-F]{6}", action.result)
    assert action.description.startswith("rgb(")


def test_iso_timestamp_uses_utc_milliseconds() -> None:
    moment = datetime(2024, 1, 2, 3, 4, 5, 678_900, tzinfo=timezone.utc)

    assert iso_timestamp(moment) == "2024-01-02T03:04:05.678Z"

from __future__ import annotations

import json
import re
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from ..services import PaletteServices
from ..types import Action
from .base import (
    IntentMatcher,
    matches_gen_prefix,
    parse_count,
    prefix_of,
    smart_action,
    starts_with_any,
)


_rng = secrets.SystemRandom()


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""

    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


# ------------------------------------------------------------------------ UUID

_UUID_WORDS = ("uuid", "uid", "guid")
_UUID_COUNT_FORM = re.compile(r"^(?:gen(?:erate)?\s+)?\d+\s+(?:uuid|uid|guid)")


class UuidMatcher(IntentMatcher):
    name = "uuid"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()
        if not (
            starts_with_any(text, _UUID_WORDS)
            or _UUID_COUNT_FORM.match(text)
            or matches_gen_prefix(text, _UUID_WORDS)
        ):
            return None

        count = parse_count(text)
        values = [str(uuid.uuid4()) for _ in range(count)]
        if count > 1:
            label = f"Generate {count} UUIDs"
            description = f"{values[0]} + {count - 1} more"
        else:
            label = "Generate UUID"
            description = values[0]
        return [
            smart_action(
                "smart-uuid",
                label,
                description,
                "Fingerprint",
                result="\n".join(values),
                services=services,
            )
        ]


# -------------------------------------------------------------------- Password

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_DIGITS = "0123456789"

PASSWORD_CHARSETS: dict[str, str] = {
    "all": _UPPER + _LOWER + _DIGITS + "!@#$%^&*()_+-=",
    "strong": _UPPER + _LOWER + _DIGITS + "!@#$%^&*()_+-=[]{}|;:,.<>?",
    "number": _DIGITS,
    "alpha": _UPPER + _LOWER,
    "alphanumeric": _UPPER + _LOWER + _DIGITS,
    "simple": _LOWER + _DIGITS,
}

DEFAULT_PASSWORD_LENGTH = 20
STRONG_PASSWORD_LENGTH = 32
MIN_PASSWORD_LENGTH = 4
MAX_PASSWORD_LENGTH = 128


@dataclass(frozen=True, slots=True)
class _PasswordModifier:
    prefixes: tuple[str, ...]
    charset: str

    @property
    def label(self) -> str:
        return self.prefixes[0].capitalize()


# the longest literal prefix wins, so "alphanum" beats "alpha"
PASSWORD_MODIFIERS: tuple[_PasswordModifier, ...] = (
    _PasswordModifier(("strong", "secure"), "strong"),
    _PasswordModifier(("number", "numeric", "digit", "pin"), "number"),
    _PasswordModifier(("alphanum",), "alphanumeric"),
    _PasswordModifier(("alpha",), "alpha"),
    _PasswordModifier(("simple", "easy"), "simple"),
)

_PASSWORD_WORDS = ("pass", "password", "passwd")
_PW_WORD = re.compile(r"^pw\b")
_HAS_PASSWORD_WORD = re.compile(r"\b(?:pass\w*|pw)\b")
_LEADING_COUNT = re.compile(r"^(?:gen(?:erate)?\s+)?(\d+)\s+")
_SHORT_NUMBER = re.compile(r"\b(\d{1,3})\b")
_MODIFIER_PREFIXES = tuple(p for modifier in PASSWORD_MODIFIERS for p in modifier.prefixes)


def generate_password(length: int, charset: str) -> str:
    return "".join(secrets.choice(charset) for _ in range(length))


def _select_modifier(text: str, words: list[str]) -> _PasswordModifier | None:
    """Pick the modifier with the longest literal hit, then fall back to word prefixes."""

    best: _PasswordModifier | None = None
    best_length = 0
    for modifier in PASSWORD_MODIFIERS:
        for prefix in modifier.prefixes:
            if prefix in text and len(prefix) > best_length:
                best, best_length = modifier, len(prefix)
    if best is not None:
        return best
    for modifier in PASSWORD_MODIFIERS:
        if any(prefix_of(word, prefix) for word in words for prefix in modifier.prefixes):
            return modifier
    return None


def _is_password_query(text: str) -> bool:
    words = text.split()
    return bool(
        starts_with_any(text, _PASSWORD_WORDS)
        or _PW_WORD.match(text)
        or matches_gen_prefix(text, (*_PASSWORD_WORDS, "pw"))
        or matches_gen_prefix(text, _MODIFIER_PREFIXES)
        or (
            words
            and starts_with_any(words[0], _MODIFIER_PREFIXES)
            and _HAS_PASSWORD_WORD.search(text)
        )
    )


class PasswordMatcher(IntentMatcher):
    name = "password"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()
        leading = _LEADING_COUNT.match(text)
        if not (_is_password_query(text) or (leading and _is_password_query(text[leading.end() :]))):
            return None

        words = text.split()
        charset = PASSWORD_CHARSETS["all"]
        length = DEFAULT_PASSWORD_LENGTH
        type_label = ""
        if modifier := _select_modifier(text, words):
            charset = PASSWORD_CHARSETS[modifier.charset]
            if modifier.charset == "strong":
                length = STRONG_PASSWORD_LENGTH
            type_label = f"{modifier.label} "

        count = 1
        count_span: tuple[int, int] | None = None
        if leading:
            value = int(leading.group(1))
            if 1 <= value <= 10:
                count = value
                count_span = leading.span(1)

        for number in _SHORT_NUMBER.finditer(text):
            if count_span is not None and number.span(1) == count_span:
                continue
            value = int(number.group(1))
            if MIN_PASSWORD_LENGTH <= value <= MAX_PASSWORD_LENGTH:
                length = value
            break

        passwords = [generate_password(length, charset) for _ in range(count)]
        if count > 1:
            label = f"Generate {count} {type_label}passwords"
            description = f"{passwords[0]} + {count - 1} more · {length} chars"
        else:
            label = f"Generate {type_label}password"
            description = f"{passwords[0]} · {length} chars"
        return [
            smart_action(
                "smart-password",
                label,
                description,
                "Lock",
                result="\n".join(passwords),
                services=services,
            )
        ]


# ----------------------------------------------------------------------- Lorem

LOREM_WORDS: tuple[str, ...] = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing",
    "elit", "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore",
    "et", "dolore", "magna", "aliqua", "enim", "ad", "minim", "veniam",
    "quis", "nostrud", "exercitation", "ullamco", "laboris", "nisi",
    "aliquip", "ex", "ea", "commodo", "consequat", "duis", "aute", "irure",
    "in", "reprehenderit", "voluptate", "velit", "esse", "cillum",
    "fugiat", "nulla", "pariatur", "excepteur", "sint", "occaecat",
    "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum",
)  # fmt: skip

HIPSTER_WORDS: tuple[str, ...] = (
    "artisan", "kombucha", "vinyl", "cardigan", "skateboard", "ethical",
    "organic", "craft", "beer", "selvage", "tattooed", "fixie",
    "portland", "brunch", "gastropub", "dreamcatcher", "aesthetic",
    "kickstarter", "vaporware", "normcore", "pitchfork", "flannel",
    "retro", "kale", "chips", "succulents", "hashtag", "tofu",
)  # fmt: skip

TECH_WORDS: tuple[str, ...] = (
    "algorithm", "API", "backend", "blockchain", "cache", "cloud",
    "compiler", "container", "database", "deploy", "devops", "docker",
    "endpoint", "framework", "frontend", "function", "GraphQL", "HTTP",
    "kubernetes", "lambda", "library", "microservice", "middleware",
    "module", "pipeline", "promise", "proxy", "React", "Redis",
    "refactor", "repository", "REST", "runtime", "schema", "server",
    "serverless", "socket", "SQL", "typescript", "webhook", "websocket",
)  # fmt: skip

LOREM_CORPORA: dict[str, tuple[str, ...]] = {
    "lorem": LOREM_WORDS,
    "hipster": HIPSTER_WORDS,
    "tech": TECH_WORDS,
}

_ANY_NUMBER = re.compile(r"(\d+)")


def random_words(count: int, words: tuple[str, ...] = LOREM_WORDS) -> str:
    return " ".join(_rng.choice(words) for _ in range(count))


def lorem_sentence(words: tuple[str, ...] = LOREM_WORDS) -> str:
    sentence = random_words(_rng.randint(8, 15), words)
    return f"{sentence[:1].upper()}{sentence[1:]}."


def lorem_paragraph(words: tuple[str, ...] = LOREM_WORDS) -> str:
    return " ".join(lorem_sentence(words) for _ in range(_rng.randint(4, 6)))


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


class LoremMatcher(IntentMatcher):
    name = "lorem"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()
        if not (starts_with_any(text, ("lorem",)) or matches_gen_prefix(text, ("lorem",))):
            return None

        number = _ANY_NUMBER.search(text)
        count = max(1, min(int(number.group(1)), 10)) if number else 1

        corpus = LOREM_WORDS
        corpus_label = ""
        for key, words in LOREM_CORPORA.items():
            if key != "lorem" and key in text:
                corpus = words
                corpus_label = f" ({key})"
                break

        if "word" in text:
            result = random_words(count, corpus)
            summary = f"{count} words{corpus_label}"
        elif "sent" in text:
            result = " ".join(lorem_sentence(corpus) for _ in range(count))
            summary = f"{_plural(count, 'sentence')}{corpus_label}"
        else:
            result = "\n\n".join(lorem_paragraph(corpus) for _ in range(count))
            summary = f"{_plural(count, 'paragraph')}{corpus_label}"

        return [
            smart_action(
                "smart-lorem",
                "Lorem Ipsum",
                f"{summary} · {result[:50]}...",
                "TextCursorInput",
                result=result,
                services=services,
            )
        ]


# ----------------------------------------------------------------- JSON sample


def json_sample() -> dict[str, object]:
    item_id = _rng.randrange(10000)
    return {
        "id": item_id,
        "name": f"item_{item_id}",
        "active": _rng.random() > 0.3,
        "value": round(_rng.random() * 100, 2),
        "created": iso_timestamp(datetime.now(timezone.utc)),
    }


class JsonSampleMatcher(IntentMatcher):
    name = "json-sample"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()
        if not (starts_with_any(text, ("json",)) or matches_gen_prefix(text, ("json",))):
            return None

        count = parse_count(text)
        samples = [json.dumps(json_sample(), indent=2) for _ in range(count)]
        result = samples[0] if count == 1 else "[\n" + ",\n".join(samples) + "\n]"
        lines = result.split("\n")
        return [
            smart_action(
                "smart-json",
                f"Generate {count} JSON objects" if count > 1 else "Generate JSON",
                lines[0] + (" ..." if len(lines) > 1 else ""),
                "Braces",
                result=result,
                services=services,
            )
        ]


# ---------------------------------------------------------------------- Random

_RANDOM_RANGE = re.compile(r"^rand(?:om)?(?:\s+number)?\s+(\d+)\s+(\d+)")
_RANDOM_BARE = re.compile(r"^rand(?:om)?(?:\s+number)?$")
_RANDOM_COLOR = re.compile(r"^rand(?:om)?\s+colou?r$")
BARE_RANDOM_LIMIT = 1_000_000


class RandomNumberMatcher(IntentMatcher):
    name = "random"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()

        if ranged := _RANDOM_RANGE.match(text):
            low, high = int(ranged.group(1)), int(ranged.group(2))
            if low >= high:
                return None
            # 32-bit draw folded into the inclusive range
            value = low + secrets.randbits(32) % (high - low + 1)
            return [
                smart_action(
                    "smart-rand",
                    f"Random: {value}",
                    f"Random number between {low} and {high}",
                    "Dice5",
                    result=str(value),
                    services=services,
                )
            ]

        if _RANDOM_BARE.match(text):
            value = secrets.randbits(32) % BARE_RANDOM_LIMIT
            return [
                smart_action(
                    "smart-rand",
                    f"Random: {value}",
                    "Random number (0-999999)",
                    "Dice5",
                    result=str(value),
                    services=services,
                )
            ]

        if _RANDOM_COLOR.match(text):
            red, green, blue = secrets.token_bytes(3)
            hex_value = f"#{red:02X}{green:02X}{blue:02X}"
            return [
                smart_action(
                    "smart-rand-color",
                    f"Random Color: {hex_value}",
                    f"rgb({red}, {green}, {blue})",
                    "Palette",
                    result=hex_value,
                    services=services,
                )
            ]

        return None


__all__ = [
    "JsonSampleMatcher",
    "LOREM_CORPORA",
    "LoremMatcher",
    "PASSWORD_CHARSETS",
    "PasswordMatcher",
    "RandomNumberMatcher",
    "UuidMatcher",
    "generate_password",
    "iso_timestamp",
]

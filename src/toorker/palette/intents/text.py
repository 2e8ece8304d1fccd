from __future__ import annotations

import asyncio
import hashlib
import re
from dataclasses import dataclass
from typing import Callable

from ..services import PaletteServices
from ..types import Action
from .base import IntentMatcher, smart_action, truncate


# ------------------------------------------------------------------------ Hash

_HASH = re.compile(r"^(sha-?256|sha-?1|sha-?384|sha-?512|hash)\s+(.+)", re.IGNORECASE | re.DOTALL)

HASH_ALGORITHMS: dict[str, tuple[str, str]] = {
    "hash": ("sha256", "SHA-256"),
    "sha256": ("sha256", "SHA-256"),
    "sha1": ("sha1", "SHA-1"),
    "sha384": ("sha384", "SHA-384"),
    "sha512": ("sha512", "SHA-512"),
}


def hash_text(algorithm: str, text: str) -> str:
    return hashlib.new(algorithm, text.encode("utf-8")).hexdigest()


class HashMatcher(IntentMatcher):
    """Digest is computed lazily on execution; the action carries no preview."""

    name = "hash"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _HASH.match(query.strip())
        if not found:
            return None

        payload = found.group(2).strip()
        if not payload:
            return None
        key = found.group(1).lower().replace("-", "")
        algorithm, display = HASH_ALGORITHMS.get(key, HASH_ALGORITHMS["hash"])
        clipboard = services.clipboard

        async def copy_digest() -> None:
            digest = await asyncio.to_thread(hash_text, algorithm, payload)
            await clipboard.write_text(digest)

        return [
            smart_action(
                "smart-hash",
                f"{display} Hash",
                f'Hash of "{truncate(payload, 40)}"',
                "ShieldCheck",
                execute=copy_digest,
            )
        ]


# ------------------------------------------------------------------------ Case

_SEPARATED_CHAR = re.compile(r"[^a-zA-Z0-9]+(.)")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WORD = re.compile(r"\w\S*")


def to_camel_case(text: str) -> str:
    return _SEPARATED_CHAR.sub(lambda m: m.group(1).upper(), text.lower())


def to_pascal_case(text: str) -> str:
    joined = _SEPARATED_CHAR.sub(lambda m: m.group(1).upper(), text)
    return joined[:1].upper() + joined[1:]


def to_snake_case(text: str) -> str:
    split = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    return re.sub(r"[\s-]+", "_", split).lower()


def to_kebab_case(text: str) -> str:
    split = _CAMEL_BOUNDARY.sub(r"\1-\2", text)
    return re.sub(r"[\s_]+", "-", split).lower()


def to_title_case(text: str) -> str:
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def to_constant_case(text: str) -> str:
    return to_snake_case(text).upper()


@dataclass(frozen=True, slots=True)
class CaseConversion:
    pattern: re.Pattern[str]
    label: str
    transform: Callable[[str], str]


def _conversion(prefix: str, label: str, transform: Callable[[str], str]) -> CaseConversion:
    return CaseConversion(re.compile(rf"^(?:{prefix})\s+(.+)", re.IGNORECASE | re.DOTALL), label, transform)


CASE_CONVERSIONS: tuple[CaseConversion, ...] = (
    _conversion(r"upper(?:case)?|to\s*upper", "UPPERCASE", str.upper),
    _conversion(r"lower(?:case)?|to\s*lower", "lowercase", str.lower),
    _conversion(r"title(?:\s*case)?|to\s*title", "Title Case", to_title_case),
    _conversion(r"camel(?:\s*case)?|to\s*camel", "camelCase", to_camel_case),
    _conversion(r"snake(?:\s*case)?|to\s*snake", "snake_case", to_snake_case),
    _conversion(r"kebab(?:\s*case)?|to\s*kebab", "kebab-case", to_kebab_case),
    _conversion(r"pascal(?:\s*case)?|to\s*pascal", "PascalCase", to_pascal_case),
    _conversion(r"constant(?:\s*case)?|to\s*constant|screaming", "CONSTANT_CASE", to_constant_case),
)


class CaseConversionMatcher(IntentMatcher):
    name = "case"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.strip()
        for conversion in CASE_CONVERSIONS:
            found = conversion.pattern.match(text)
            if not found:
                continue
            result = conversion.transform(found.group(1).strip())
            return [
                smart_action(
                    "smart-case",
                    conversion.label,
                    result,
                    "CaseSensitive",
                    result=result,
                    services=services,
                )
            ]
        return None


# ------------------------------------------------------------------ Word count

_WORD_COUNT = re.compile(r"^(?:count|wc|wordcount|word\s*count|len|length)\s+(.+)", re.IGNORECASE | re.DOTALL)


def count_text(text: str) -> str:
    words = len(text.split())
    lines = text.count("\n") + 1
    return f"{words} words, {len(text)} characters, {lines} lines"


class WordCountMatcher(IntentMatcher):
    name = "word-count"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _WORD_COUNT.match(query.strip())
        if not found:
            return None
        payload = found.group(1).strip()
        if not payload:
            return None

        result = count_text(payload)
        return [smart_action("smart-wc", "Word Count", result, "Hash", result=result, services=services)]


# --------------------------------------------------------------------- Reverse

_REVERSE = re.compile(r"^(?:reverse|rev|flip)\s+(.+)", re.IGNORECASE | re.DOTALL)


class ReverseStringMatcher(IntentMatcher):
    name = "reverse"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _REVERSE.match(query.strip())
        if not found:
            return None
        payload = found.group(1).strip()
        if not payload:
            return None

        result = payload[::-1]
        return [
            smart_action(
                "smart-reverse",
                "Reversed",
                result,
                "ArrowLeftRight",
                result=result,
                services=services,
            )
        ]


__all__ = [
    "CASE_CONVERSIONS",
    "CaseConversionMatcher",
    "HASH_ALGORITHMS",
    "HashMatcher",
    "ReverseStringMatcher",
    "WordCountMatcher",
    "count_text",
    "hash_text",
    "to_camel_case",
    "to_constant_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
    "to_title_case",
]

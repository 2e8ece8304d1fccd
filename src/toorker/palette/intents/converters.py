from __future__ import annotations

import base64
import binascii
import re
import time
from datetime import datetime, timezone
from urllib.parse import quote, unquote_to_bytes

from ..services import PaletteServices, ToolSelection
from ..types import Action
from .base import IntentMatcher, smart_action, starts_with_any
from .generators import iso_timestamp


LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


# ------------------------------------------------------------------- Timestamp

_NOW_WORDS = ("now", "timestamp", "unix", "current time")
_LONG_DIGITS = re.compile(r"\d{8,}")
_PREFIXED_TIMESTAMP = re.compile(r"^(?:epoch|unix|timestamp)\s+(\d{10,13})$")
_BARE_TIMESTAMP = re.compile(r"^(\d{10,13})$")
MILLISECOND_THRESHOLD = 10**12


def parse_epoch(value: int) -> datetime | None:
    """Interpret ``value`` as seconds, or milliseconds when above 10^12."""

    millis = value if value > MILLISECOND_THRESHOLD else value * 1000
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


class TimestampMatcher(IntentMatcher):
    name = "timestamp"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.lower().strip()

        if starts_with_any(text, _NOW_WORDS) and not _LONG_DIGITS.search(text):
            now = int(time.time())
            clipboard = services.clipboard

            async def copy_current() -> None:
                await clipboard.write_text(str(int(time.time())))

            return [
                smart_action(
                    "smart-timestamp-now",
                    "Current Unix Timestamp",
                    str(now),
                    "Clock",
                    result=str(now),
                    execute=copy_current,
                )
            ]

        found = _PREFIXED_TIMESTAMP.match(text) or _BARE_TIMESTAMP.match(text)
        if not found:
            return None
        moment = parse_epoch(int(found.group(1)))
        if moment is None:
            return None

        formatted = iso_timestamp(moment)
        local = moment.astimezone().strftime(LOCAL_TIME_FORMAT)
        return [
            smart_action(
                "smart-timestamp-convert",
                "Convert Timestamp",
                f"{formatted} · {local}",
                "Calendar",
                result=formatted,
                services=services,
            )
        ]


# ----------------------------------------------------------------- Number base

_NUMBER_BASE = re.compile(
    r"^(0x[0-9a-f]+|0b[01]+|0o[0-7]+|\d+)\s+(?:to\s+)?(hex|dec|bin|oct)[a-z]*",
    re.IGNORECASE,
)
_RADIX_PREFIXES = {"0x": 16, "0b": 2, "0o": 8}


def parse_integer_literal(literal: str) -> int:
    radix = _RADIX_PREFIXES.get(literal[:2].lower())
    if radix is None:
        return int(literal, 10)
    return int(literal[2:], radix)


def convert_base(value: int, target: str) -> tuple[str, str]:
    """Return ``(result, label)`` for ``target`` (hex, dec, bin or oct prefix)."""

    target = target.lower()
    if target.startswith("hex"):
        return f"0x{value:X}", "Hexadecimal"
    if target.startswith("dec"):
        return str(value), "Decimal"
    if target.startswith("bin"):
        return f"0b{value:b}", "Binary"
    if target.startswith("oct"):
        return f"0o{value:o}", "Octal"
    raise ValueError(f"Unknown base: {target}")


class NumberBaseMatcher(IntentMatcher):
    name = "number-base"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _NUMBER_BASE.match(query.strip())
        if not found:
            return None

        literal, target = found.group(1), found.group(2)
        try:
            result, label = convert_base(parse_integer_literal(literal), target)
        except ValueError:
            return None
        return [
            smart_action(
                "smart-number-base",
                f"{literal} → {label}",
                result,
                "Binary",
                result=result,
                services=services,
            )
        ]


# ---------------------------------------------------------------------- Base64

_B64_DECODE = re.compile(r"^(?:base64|b64)\s+(?:decode|dec)\s+(.+)", re.IGNORECASE | re.DOTALL)
_B64_ENCODE = re.compile(r"^(?:base64|b64)\s+(?:encode\s+|enc\s+)?(.+)", re.IGNORECASE | re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


def decode_base64_text(payload: str) -> str | None:
    """Decode base64 to UTF-8 text; missing padding is tolerated, garbage is not."""

    compact = _WHITESPACE.sub("", payload)
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None


class Base64Matcher(IntentMatcher):
    name = "base64"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.strip()

        if decoding := _B64_DECODE.match(text):
            decoded = decode_base64_text(decoding.group(1).strip())
            if decoded is None:
                return None
            return [
                smart_action(
                    "smart-b64-decode",
                    "Base64 Decode",
                    decoded,
                    "FileCode",
                    result=decoded,
                    services=services,
                )
            ]

        if encoding := _B64_ENCODE.match(text):
            payload = encoding.group(1).strip()
            if not payload:
                return None
            try:
                encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
            except UnicodeEncodeError:
                return None
            return [
                smart_action(
                    "smart-b64-encode",
                    "Base64 Encode",
                    encoded,
                    "FileCode",
                    result=encoded,
                    services=services,
                )
            ]

        return None


# ------------------------------------------------------------------ URL encode

_URL_DECODE = re.compile(r"^(?:url\s*decode|urldecode|decodeuri)\s+(.+)", re.IGNORECASE | re.DOTALL)
_URL_ENCODE = re.compile(r"^(?:url\s*encode|urlencode|encodeuri)\s+(.+)", re.IGNORECASE | re.DOTALL)
_BROKEN_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")
# unreserved set of encodeURIComponent beyond quote()'s own "_.-~"
URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(text: str) -> str:
    return quote(text, safe=URI_COMPONENT_SAFE)


def decode_uri_component(text: str) -> str | None:
    """Strict percent-decoding: malformed escapes or invalid UTF-8 yield ``None``."""

    if _BROKEN_ESCAPE.search(text):
        return None
    try:
        return unquote_to_bytes(text).decode("utf-8")
    except UnicodeDecodeError:
        return None


class UrlEncodeMatcher(IntentMatcher):
    name = "url-encode"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.strip()

        if decoding := _URL_DECODE.match(text):
            decoded = decode_uri_component(decoding.group(1).strip())
            if decoded is None:
                return None
            return [
                smart_action(
                    "smart-url-decode",
                    "URL Decode",
                    decoded,
                    "Link",
                    result=decoded,
                    services=services,
                )
            ]

        if encoding := _URL_ENCODE.match(text):
            try:
                encoded = encode_uri_component(encoding.group(1).strip())
            except UnicodeEncodeError:
                return None
            return [
                smart_action(
                    "smart-url-encode",
                    "URL Encode",
                    encoded,
                    "Link",
                    result=encoded,
                    services=services,
                )
            ]

        return None


# ----------------------------------------------------------------------- Color

_HEX_COLOR = re.compile(r"^(?:color\s+)?#([0-9a-f]{3}(?:[0-9a-f]{3})?)$", re.IGNORECASE)
_RGB_COLOR = re.compile(
    r"^(?:color\s+)?rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$",
    re.IGNORECASE,
)


def expand_hex(value: str) -> str:
    if len(value) == 3:
        return "".join(char * 2 for char in value)
    return value


class ColorMatcher(IntentMatcher):
    name = "color"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        text = query.strip()

        if hex_match := _HEX_COLOR.match(text):
            hex_value = expand_hex(hex_match.group(1)).upper()
            red, green, blue = (int(hex_value[i : i + 2], 16) for i in (0, 2, 4))
            result = f"rgb({red}, {green}, {blue})"
            return [
                smart_action(
                    "smart-color-hex",
                    f"#{hex_value} → RGB",
                    result,
                    "Palette",
                    result=result,
                    services=services,
                )
            ]

        if rgb_match := _RGB_COLOR.match(text):
            channels = [int(group) for group in rgb_match.groups()]
            if any(channel > 255 for channel in channels):
                return None
            red, green, blue = channels
            result = f"#{red:02X}{green:02X}{blue:02X}"
            return [
                smart_action(
                    "smart-color-rgb",
                    f"rgb({red}, {green}, {blue}) → HEX",
                    result,
                    "Palette",
                    result=result,
                    services=services,
                )
            ]

        return None


# --------------------------------------------------------------- Data formats

_DATA_CONVERT = re.compile(r"^(?:to\s+)?(json|yaml|toml)\s+to\s+(json|yaml|toml)$", re.IGNORECASE)
DATA_CONVERTER_TOOL = "data-converter"


class DataConvertMatcher(IntentMatcher):
    name = "data-convert"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _DATA_CONVERT.match(query.strip())
        if not found:
            return None

        navigator = services.navigator

        async def open_converter() -> None:
            await navigator.navigate(ToolSelection(DATA_CONVERTER_TOOL))

        source, target = found.group(1).upper(), found.group(2).upper()
        return [
            smart_action(
                "smart-data-convert",
                f"{source} → {target}",
                "Open data converter",
                "ArrowLeftRight",
                execute=open_converter,
            )
        ]


__all__ = [
    "Base64Matcher",
    "ColorMatcher",
    "DataConvertMatcher",
    "NumberBaseMatcher",
    "TimestampMatcher",
    "UrlEncodeMatcher",
    "convert_base",
    "decode_base64_text",
    "decode_uri_component",
    "encode_uri_component",
    "parse_epoch",
]

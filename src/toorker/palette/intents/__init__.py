"""Intent matchers that turn free-text queries into Instant actions."""

from __future__ import annotations

from ..services import PaletteServices
from ..types import Action
from .base import IntentMatcher, IntentMatcherChain
from .calculator import CalculationMatcher, safe_calculate
from .converters import (
    Base64Matcher,
    ColorMatcher,
    DataConvertMatcher,
    NumberBaseMatcher,
    TimestampMatcher,
    UrlEncodeMatcher,
)
from .generators import (
    JsonSampleMatcher,
    LoremMatcher,
    PasswordMatcher,
    RandomNumberMatcher,
    UuidMatcher,
)
from .system import IpAddressMatcher, KillProcessMatcher, OpenDirectoryMatcher, QrCodeMatcher
from .text import CaseConversionMatcher, HashMatcher, ReverseStringMatcher, WordCountMatcher


DEFAULT_MATCHERS: tuple[IntentMatcher, ...] = (
    CalculationMatcher(),
    UuidMatcher(),
    PasswordMatcher(),
    TimestampMatcher(),
    NumberBaseMatcher(),
    Base64Matcher(),
    UrlEncodeMatcher(),
    ColorMatcher(),
    HashMatcher(),
    KillProcessMatcher(),
    LoremMatcher(),
    JsonSampleMatcher(),
    QrCodeMatcher(),
    IpAddressMatcher(),
    OpenDirectoryMatcher(),
    CaseConversionMatcher(),
    WordCountMatcher(),
    RandomNumberMatcher(),
    ReverseStringMatcher(),
    DataConvertMatcher(),
)

DEFAULT_CHAIN = IntentMatcherChain(DEFAULT_MATCHERS)


def get_smart_actions(query: str, services: PaletteServices) -> list[Action]:
    return DEFAULT_CHAIN.get_smart_actions(query, services)


__all__ = [
    "DEFAULT_CHAIN",
    "DEFAULT_MATCHERS",
    "IntentMatcher",
    "IntentMatcherChain",
    "get_smart_actions",
    "safe_calculate",
]

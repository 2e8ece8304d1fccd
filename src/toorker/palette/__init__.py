"""Action ranking and intent engine behind the quick launcher palette."""

from .intents import DEFAULT_CHAIN, DEFAULT_MATCHERS, IntentMatcher, IntentMatcherChain, get_smart_actions
from .orchestrator import PaletteController, PaletteState, PaletteWindowHost
from .recent import RecentActions
from .scoring import filter_actions, flatten_sections, fuzzy_score, score_action
from .services import (
    Clipboard,
    FolderOpener,
    IpLookup,
    Navigator,
    PaletteServices,
    PortEntry,
    PortProvider,
    ProcessInfo,
    ProcessProvider,
    ToolSelection,
)
from .sources import gather_actions
from .types import INSTANT_SECTION, RECENT_SECTION, Action, ActionKind, Feedback, FeedbackKind, Section

__all__ = [
    "Action",
    "ActionKind",
    "Clipboard",
    "DEFAULT_CHAIN",
    "DEFAULT_MATCHERS",
    "Feedback",
    "FeedbackKind",
    "FolderOpener",
    "INSTANT_SECTION",
    "IntentMatcher",
    "IntentMatcherChain",
    "IpLookup",
    "Navigator",
    "PaletteController",
    "PaletteServices",
    "PaletteState",
    "PaletteWindowHost",
    "PortEntry",
    "PortProvider",
    "ProcessInfo",
    "ProcessProvider",
    "RECENT_SECTION",
    "RecentActions",
    "Section",
    "ToolSelection",
    "filter_actions",
    "flatten_sections",
    "fuzzy_score",
    "gather_actions",
    "get_smart_actions",
    "score_action",
]

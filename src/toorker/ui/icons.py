"""Glyphs used to render action icons in the palette list."""

from __future__ import annotations


FALLBACK_GLYPH = "•"

ICON_GLYPHS: dict[str, str] = {
    "Activity": "📈",
    "ArrowLeftRight": "⇄",
    "Binary": "01",
    "Braces": "{}",
    "Calculator": "🧮",
    "Calendar": "📅",
    "CaseSensitive": "Aa",
    "Clock": "🕒",
    "Code": "</>",
    "Copy": "⧉",
    "Dice5": "🎲",
    "FileCode": "📄",
    "FileText": "📝",
    "Fingerprint": "🆔",
    "FolderOpen": "📂",
    "GitCompareArrows": "⇆",
    "Globe": "🌐",
    "Hash": "#",
    "Home": "🏠",
    "KeyRound": "🔑",
    "Link": "🔗",
    "Lock": "🔒",
    "Palette": "🎨",
    "QrCode": "▦",
    "Radio": "📡",
    "Regex": ".*",
    "Send": "➤",
    "ShieldCheck": "🛡",
    "TextCursorInput": "¶",
    "Timer": "⏱",
    "Trash2": "🗑",
}


def glyph_for(icon: str) -> str:
    return ICON_GLYPHS.get(icon, FALLBACK_GLYPH)


__all__ = ["FALLBACK_GLYPH", "ICON_GLYPHS", "glyph_for"]

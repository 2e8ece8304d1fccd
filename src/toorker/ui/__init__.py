"""Qt rendering of the quick launcher palette."""

from .clipboard import QtClipboard, QtNavigator
from .icons import FALLBACK_GLYPH, ICON_GLYPHS, glyph_for
from .palette_window import PaletteWindow

__all__ = [
    "FALLBACK_GLYPH",
    "ICON_GLYPHS",
    "PaletteWindow",
    "QtClipboard",
    "QtNavigator",
    "glyph_for",
]

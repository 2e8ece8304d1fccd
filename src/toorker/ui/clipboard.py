from __future__ import annotations

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QGuiApplication

from toorker.palette.services import ToolSelection
from toorker.utils import ClipboardError, get_logger


logger = get_logger(__name__)


class QtClipboard:
    """Clipboard collaborator writing through the application clipboard."""

    async def write_text(self, text: str) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            raise ClipboardError("No application clipboard is available")
        clipboard.setText(text)


class QtNavigator(QObject):
    """Publishes tool selections to whichever shell window listens."""

    tool_selected = Signal(object)

    async def navigate(self, selection: ToolSelection) -> None:
        logger.debug(
            "Palette tool selected",
            tool_id=selection.tool_id,
            prefill_url=selection.prefill_url,
        )
        self.tool_selected.emit(selection)


__all__ = ["QtClipboard", "QtNavigator"]

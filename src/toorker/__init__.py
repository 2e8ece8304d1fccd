from __future__ import annotations

import asyncio
import sys

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon
from qasync import QEventLoop

from toorker.bootstrap import build_services
from toorker.config import APP_NAME, SettingsManager, get_keybinding
from toorker.palette import PaletteController, ToolSelection
from toorker.tools import get_tool
from toorker.ui import PaletteWindow, QtNavigator
from toorker.utils import LoggingOptions, configure_logging, get_logger


def main() -> None:
    settings = SettingsManager().load()
    log_path = configure_logging(LoggingOptions.from_settings(settings))
    logger = get_logger(__name__)
    logger.info("Starting Toorker quick launcher", log_path=str(log_path) if log_path else None)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    services = build_services(settings)
    window = PaletteWindow()
    controller = PaletteController(window, services, settings=settings)
    window.bind(controller)

    if isinstance(services.navigator, QtNavigator):
        services.navigator.tool_selected.connect(_log_tool_selection)

    tray = _install_tray(app, window, get_keybinding("palette", settings.keybindings))
    if tray is None:
        # no tray to resummon from: hiding the palette ends the session
        controller.changed.subscribe(lambda _payload: _quit_when_hidden(app, window))

    app.aboutToQuit.connect(loop.stop)
    window.summon()

    try:
        with loop:
            loop.run_forever()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def _install_tray(
    app: QApplication, window: PaletteWindow, shortcut: str
) -> tuple[QSystemTrayIcon, QMenu] | None:
    if not QSystemTrayIcon.isSystemTrayAvailable():
        return None

    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
    tray = QSystemTrayIcon(icon, app)
    tray.setToolTip(f"{APP_NAME} ({shortcut})" if shortcut else APP_NAME)

    menu = QMenu()
    show_action = QAction("Open palette", menu)
    show_action.triggered.connect(window.summon)
    quit_action = QAction("Quit", menu)
    quit_action.triggered.connect(app.quit)
    menu.addAction(show_action)
    menu.addSeparator()
    menu.addAction(quit_action)
    tray.setContextMenu(menu)
    tray.activated.connect(lambda _reason: window.summon())
    tray.show()
    return tray, menu


def _quit_when_hidden(app: QApplication, window: PaletteWindow) -> None:
    if not window.isVisible():
        app.quit()


def _log_tool_selection(selection: ToolSelection) -> None:
    tool = get_tool(selection.tool_id) if selection.tool_id else None
    get_logger(__name__).info(
        "Tool requested from palette",
        tool_id=selection.tool_id or "home",
        tool_name=tool.name if tool else None,
        prefill_url=selection.prefill_url,
    )


__all__ = ["main"]

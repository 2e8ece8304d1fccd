from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable

from platformdirs import (
    user_data_dir,
    user_desktop_dir,
    user_documents_dir,
    user_downloads_dir,
    user_music_dir,
    user_pictures_dir,
    user_videos_dir,
)
from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

from toorker.utils import get_logger


logger = get_logger(__name__)

UrlOpener = Callable[[QUrl], bool]

KNOWN_FOLDER_RESOLVERS: dict[str, Callable[[], str | Path]] = {
    "desktop": user_desktop_dir,
    "downloads": user_downloads_dir,
    "documents": user_documents_dir,
    "pictures": user_pictures_dir,
    "music": user_music_dir,
    "videos": user_videos_dir,
    "home": Path.home,
    "temp": tempfile.gettempdir,
    "appdata": user_data_dir,
}


def resolve_known_folder(name: str) -> Path:
    try:
        resolver = KNOWN_FOLDER_RESOLVERS[name.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown folder alias: {name}") from exc
    return Path(resolver())


def expand_path(raw: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(raw.strip())))


class DesktopFolderOpener:
    """Open folders in the platform file manager; failures are only logged."""

    def __init__(self, opener: UrlOpener | None = None) -> None:
        self._opener = opener or QDesktopServices.openUrl

    async def open_known(self, name: str) -> None:
        try:
            folder = resolve_known_folder(name)
        except ValueError:
            logger.warning("Unknown folder alias requested", alias=name)
            return
        self._open(folder)

    async def open_path(self, path: str) -> None:
        target = expand_path(path)
        if not target.exists():
            logger.warning("Path does not exist; nothing to open", path=str(target))
            return
        self._open(target)

    def _open(self, folder: Path) -> None:
        opened = self._opener(QUrl.fromLocalFile(str(folder)))
        if opened:
            logger.debug("Opened folder", path=str(folder))
        else:
            logger.warning("File manager refused to open folder", path=str(folder))


__all__ = ["DesktopFolderOpener", "KNOWN_FOLDER_RESOLVERS", "expand_path", "resolve_known_folder"]

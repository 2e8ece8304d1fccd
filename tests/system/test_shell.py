from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QUrl

from toorker.system import shell
from toorker.system.shell import DesktopFolderOpener, expand_path, resolve_known_folder


class RecordingOpener:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.urls: list[QUrl] = []

    def __call__(self, url: QUrl) -> bool:
        self.urls.append(url)
        return self.result

    @property
    def paths(self) -> list[str]:
        return [url.toLocalFile() for url in self.urls]


def test_resolve_known_folder_is_case_insensitive() -> None:
    assert resolve_known_folder("HOME") == Path.home()


def test_resolve_unknown_folder_raises() -> None:
    with pytest.raises(ValueError):
        resolve_known_folder("attic")


def test_expand_path_handles_user_and_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TOORKER_SHELL_ROOT", str(tmp_path))

    assert expand_path("~/notes") == Path.home() / "notes"
    assert expand_path(" $TOORKER_SHELL_ROOT/sub ") == tmp_path / "sub"


@pytest.mark.asyncio
async def test_open_known_uses_resolver(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setitem(shell.KNOWN_FOLDER_RESOLVERS, "desktop", lambda: tmp_path)
    opener = RecordingOpener()

    await DesktopFolderOpener(opener).open_known("desktop")

    assert opener.paths == [str(tmp_path)]


@pytest.mark.asyncio
async def test_open_known_ignores_unknown_alias() -> None:
    opener = RecordingOpener()

    await DesktopFolderOpener(opener).open_known("attic")

    assert opener.urls == []


@pytest.mark.asyncio
async def test_open_path_requires_existing_target(tmp_path: Path) -> None:
    opener = RecordingOpener()
    folder = DesktopFolderOpener(opener)

    await folder.open_path(str(tmp_path / "missing"))
    await folder.open_path(str(tmp_path))

    assert opener.paths == [str(tmp_path)]


@pytest.mark.asyncio
async def test_refused_open_is_not_an_error(tmp_path: Path) -> None:
    opener = RecordingOpener(result=False)

    await DesktopFolderOpener(opener).open_path(str(tmp_path))

    assert len(opener.urls) == 1

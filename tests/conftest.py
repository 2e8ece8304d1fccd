from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from PySide6.QtWidgets import QApplication

from tests.stubs import (
    FakeClipboard,
    FakeFolderOpener,
    FakeIpLookup,
    FakeNavigator,
    FakePortProvider,
    FakeProcessProvider,
    FakeScheduler,
    FakeWindow,
)
from toorker.palette import PaletteServices


os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app() -> Iterator[QApplication]:
    """Ensure a QApplication instance exists for UI tests."""

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def services() -> PaletteServices:
    """Palette collaborators backed by in-memory fakes."""

    return PaletteServices(
        clipboard=FakeClipboard(),
        navigator=FakeNavigator(),
        ports=FakePortProvider(),
        processes=FakeProcessProvider(),
        folders=FakeFolderOpener(),
        ip_lookup=FakeIpLookup(),
    )


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()

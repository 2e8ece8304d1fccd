from __future__ import annotations

from toorker.config import Settings
from toorker.palette import PaletteServices
from toorker.system import HttpIpLookup, PsutilPortProvider, PsutilProcessProvider
from toorker.system.shell import DesktopFolderOpener
from toorker.ui import QtClipboard, QtNavigator
from toorker.utils import get_logger


logger = get_logger(__name__)


def build_services(settings: Settings | None = None) -> PaletteServices:
    """Wire the concrete desktop collaborators consumed by palette actions."""

    settings = settings or Settings()
    services = PaletteServices(
        clipboard=QtClipboard(),
        navigator=QtNavigator(),
        ports=PsutilPortProvider(),
        processes=PsutilProcessProvider(),
        folders=DesktopFolderOpener(),
        ip_lookup=HttpIpLookup.from_settings(settings),
    )
    logger.debug("Palette services initialised", ip_lookup_url=settings.ip_lookup_url)
    return services


__all__ = ["build_services"]

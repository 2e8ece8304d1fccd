from __future__ import annotations

import re

from toorker.utils import ProviderError, get_logger

from ..services import PaletteServices, ToolSelection
from ..types import Action
from .base import IntentMatcher, smart_action, truncate


logger = get_logger(__name__)


# ---------------------------------------------------------------- Kill process

_KILL = re.compile(r"^(?:kill|close|stop|terminate|end|quit)\s+(.+)", re.DOTALL)
_PORT_TARGET = re.compile(r"^port\s+\d+$")


class KillProcessMatcher(IntentMatcher):
    """``kill <name>`` terminates every process whose name contains ``<name>``."""

    name = "kill-process"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _KILL.match(query.lower().strip())
        if not found:
            return None

        target = found.group(1).strip()
        if _PORT_TARGET.match(target) or len(target) < 2:
            return None
        processes = services.processes

        async def kill_matching() -> None:
            running = await processes.list_processes()
            matching = [proc for proc in running if target in proc.name.lower()]
            logger.info("Killing processes by name", target=target, matches=len(matching))
            for proc in matching:
                try:
                    await processes.kill_process(proc.pid)
                except (ProviderError, OSError) as exc:
                    # protected or already gone; keep going with the rest
                    logger.debug("Process kill skipped", pid=proc.pid, name=proc.name, error=str(exc))

        return [
            smart_action(
                f"smart-kill-{target}",
                f'Kill "{target}"',
                f'Terminate all processes matching "{target}"',
                "Trash2",
                execute=kill_matching,
            )
        ]


# --------------------------------------------------------------------- QR code

_QR = re.compile(r"^qr\s+(.+)", re.IGNORECASE | re.DOTALL)
QR_TOOL = "qr-code"


class QrCodeMatcher(IntentMatcher):
    name = "qr-code"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _QR.match(query.strip())
        if not found:
            return None
        payload = found.group(1).strip()
        if not payload:
            return None
        navigator = services.navigator

        async def open_qr_tool() -> None:
            await navigator.navigate(ToolSelection(QR_TOOL, prefill_url=payload))

        return [
            smart_action(
                "smart-qr",
                "Generate QR Code",
                truncate(payload, 50),
                "QrCode",
                execute=open_qr_tool,
            )
        ]


# ------------------------------------------------------------------ IP address

IP_PHRASES = frozenset(
    {
        "ip",
        "my ip",
        "myip",
        "ip public",
        "public ip",
        "ip address",
        "what is my ip",
        "whatismyip",
    }
)
IP_LOOKUP_FAILED = "Failed to fetch IP"


class IpAddressMatcher(IntentMatcher):
    name = "ip-address"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        if query.lower().strip() not in IP_PHRASES:
            return None
        lookup = services.ip_lookup
        clipboard = services.clipboard

        async def copy_public_ip() -> None:
            try:
                address = await lookup.fetch_public_ip()
            except ProviderError as exc:
                logger.warning("Public IP lookup failed", error=str(exc))
                address = IP_LOOKUP_FAILED
            await clipboard.write_text(address)

        return [
            smart_action(
                "smart-ip-public",
                "Public IP Address",
                "Fetch & copy your public IP address",
                "Globe",
                execute=copy_public_ip,
            )
        ]


# -------------------------------------------------------------- Open directory

_OPEN = re.compile(r"^open\s+(.+)", re.IGNORECASE | re.DOTALL)
_DRIVE_PREFIX = re.compile(r"^[a-z]:", re.IGNORECASE)

KNOWN_FOLDERS: dict[str, str] = {
    "desktop": "Desktop",
    "downloads": "Downloads",
    "documents": "Documents",
    "pictures": "Pictures",
    "music": "Music",
    "videos": "Videos",
    "home": "Home",
    "temp": "Temp",
    "appdata": "AppData",
}


def looks_like_path(text: str) -> bool:
    return "\\" in text or "/" in text or bool(_DRIVE_PREFIX.match(text))


def shorten_path(path: str, limit: int = 50) -> str:
    if len(path) <= limit:
        return path
    return "..." + path[-(limit - 3) :]


class OpenDirectoryMatcher(IntentMatcher):
    name = "open-directory"

    def match(self, query: str, services: PaletteServices) -> list[Action] | None:
        found = _OPEN.match(query.strip())
        if not found:
            return None

        raw_target = found.group(1).strip()
        target = raw_target.lower()
        folders = services.folders

        if label := KNOWN_FOLDERS.get(target):

            async def open_known() -> None:
                await folders.open_known(target)

            return [
                smart_action(
                    f"smart-open-{target}",
                    f"Open {label}",
                    f"Open {label} folder in file explorer",
                    "FolderOpen",
                    execute=open_known,
                )
            ]

        if looks_like_path(raw_target):

            async def open_path() -> None:
                await folders.open_path(raw_target)

            return [
                smart_action(
                    "smart-open-path",
                    "Open in Explorer",
                    shorten_path(raw_target),
                    "FolderOpen",
                    execute=open_path,
                )
            ]

        return None


__all__ = [
    "IP_LOOKUP_FAILED",
    "IP_PHRASES",
    "IpAddressMatcher",
    "KNOWN_FOLDERS",
    "KillProcessMatcher",
    "OpenDirectoryMatcher",
    "QrCodeMatcher",
    "looks_like_path",
    "shorten_path",
]

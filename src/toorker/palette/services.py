"""Collaborator contracts consumed by palette actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class SystemRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class PortEntry(SystemRecord):
    port: int
    protocol: str
    pid: int
    process_name: str
    executable_path: str | None = None


class ProcessInfo(SystemRecord):
    pid: int
    name: str
    memory_kb: int = 0
    executable_path: str | None = None


@dataclass(frozen=True, slots=True)
class ToolSelection:
    """Payload asking the host shell to switch tools (``None`` means home)."""

    tool_id: str | None
    prefill_url: str | None = None


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None: ...


class Navigator(Protocol):
    async def navigate(self, selection: ToolSelection) -> None: ...


class PortProvider(Protocol):
    async def scan_ports(self) -> list[PortEntry]: ...

    async def kill_by_port(self, port: int) -> None: ...


class ProcessProvider(Protocol):
    async def list_processes(self) -> list[ProcessInfo]: ...

    async def kill_process(self, pid: int) -> None: ...


class FolderOpener(Protocol):
    async def open_known(self, name: str) -> None: ...

    async def open_path(self, path: str) -> None: ...


class IpLookup(Protocol):
    async def fetch_public_ip(self) -> str: ...


@dataclass(slots=True)
class PaletteServices:
    clipboard: Clipboard
    navigator: Navigator
    ports: PortProvider
    processes: ProcessProvider
    folders: FolderOpener
    ip_lookup: IpLookup


__all__ = [
    "Clipboard",
    "FolderOpener",
    "IpLookup",
    "Navigator",
    "PaletteServices",
    "PortEntry",
    "PortProvider",
    "ProcessInfo",
    "ProcessProvider",
    "ToolSelection",
]

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from toorker.palette import PortEntry, ProcessInfo, ToolSelection
from toorker.utils import PortScanError, ProcessProviderError


class FakeClipboard:
    def __init__(self) -> None:
        self.writes: list[str] = []

    @property
    def text(self) -> str | None:
        return self.writes[-1] if self.writes else None

    async def write_text(self, text: str) -> None:
        self.writes.append(text)


class FakeNavigator:
    def __init__(self) -> None:
        self.selections: list[ToolSelection] = []

    async def navigate(self, selection: ToolSelection) -> None:
        self.selections.append(selection)


class FakePortProvider:
    """Serves a fixed port list, or raises ``error`` from every scan."""

    def __init__(
        self,
        entries: Iterable[PortEntry] = (),
        *,
        error: Exception | None = None,
    ) -> None:
        self.entries = list(entries)
        self.error = error
        self.scans = 0
        self.killed: list[int] = []

    async def scan_ports(self) -> list[PortEntry]:
        self.scans += 1
        if self.error is not None:
            raise self.error
        return list(self.entries)

    async def kill_by_port(self, port: int) -> None:
        if not any(entry.port == port for entry in self.entries):
            raise PortScanError(f"No process owns port {port}")
        self.killed.append(port)


class FakeProcessProvider:
    def __init__(
        self,
        processes: Iterable[ProcessInfo] = (),
        *,
        protected: Iterable[int] = (),
    ) -> None:
        self.processes = list(processes)
        self.protected = set(protected)
        self.kill_attempts: list[int] = []
        self.killed: list[int] = []

    async def list_processes(self) -> list[ProcessInfo]:
        return list(self.processes)

    async def kill_process(self, pid: int) -> None:
        self.kill_attempts.append(pid)
        if pid in self.protected:
            raise ProcessProviderError("Access denied", pid=pid)
        self.killed.append(pid)


class FakeFolderOpener:
    def __init__(self) -> None:
        self.known: list[str] = []
        self.paths: list[str] = []

    async def open_known(self, name: str) -> None:
        self.known.append(name)

    async def open_path(self, path: str) -> None:
        self.paths.append(path)


class FakeIpLookup:
    def __init__(self, address: str = "203.0.113.7", *, error: Exception | None = None) -> None:
        self.address = address
        self.error = error

    async def fetch_public_ip(self) -> str:
        if self.error is not None:
            raise self.error
        return self.address


@dataclass(slots=True)
class FakeWindow:
    hidden: int = 0
    focused: int = 0

    def hide(self) -> None:
        self.hidden += 1

    def focus_input(self) -> None:
        self.focused += 1


@dataclass(slots=True)
class ScheduledCall:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class FakeScheduler:
    """Collects delayed callbacks so tests decide when time passes."""

    calls: list[ScheduledCall] = field(default_factory=list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> Callable[[], None]:
        call = ScheduledCall(delay, callback)
        self.calls.append(call)
        return call.cancel

    @property
    def pending(self) -> list[ScheduledCall]:
        return [call for call in self.calls if not call.cancelled]

    def fire_all(self) -> None:
        for call in self.pending:
            call.cancelled = True
            call.callback()


def port_entry(port: int, process_name: str = "node", pid: int = 4242) -> PortEntry:
    return PortEntry(port=port, protocol="TCP", pid=pid, process_name=process_name)

"""Listening socket discovery backed by psutil."""

from __future__ import annotations

import asyncio
import socket

import psutil

from toorker.palette.services import PortEntry
from toorker.utils import PortScanError, ProcessProviderError, get_logger


logger = get_logger(__name__)

UNKNOWN_PROCESS = "unknown"


def _protocol_of(connection) -> str | None:
    if connection.type == socket.SOCK_STREAM:
        return "TCP" if connection.status == psutil.CONN_LISTEN else None
    if connection.type == socket.SOCK_DGRAM:
        # bound UDP sockets have no remote address
        return "UDP" if not connection.raddr else None
    return None


def _describe_process(pid: int, cache: dict[int, tuple[str, str | None]]) -> tuple[str, str | None]:
    if pid in cache:
        return cache[pid]
    name, exe = UNKNOWN_PROCESS, None
    if pid:
        try:
            process = psutil.Process(pid)
            name = process.name() or UNKNOWN_PROCESS
            try:
                exe = process.exe() or None
            except (psutil.AccessDenied, psutil.ZombieProcess):
                exe = None
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    cache[pid] = (name, exe)
    return name, exe


def _net_connections() -> list:
    try:
        return psutil.net_connections(kind="inet")
    except (psutil.AccessDenied, OSError) as exc:
        raise PortScanError(f"Unable to enumerate network sockets: {exc}") from exc


def scan_listening_ports() -> list[PortEntry]:
    """Blocking scan of listening TCP and bound UDP sockets, one entry per port.

    A port bound on both protocols keeps whichever socket psutil reports first.
    """

    entries: dict[int, PortEntry] = {}
    processes: dict[int, tuple[str, str | None]] = {}
    for connection in _net_connections():
        if not connection.laddr:
            continue
        protocol = _protocol_of(connection)
        if protocol is None:
            continue
        key = connection.laddr.port
        if key in entries:
            continue
        pid = connection.pid or 0
        name, exe = _describe_process(pid, processes)
        entries[key] = PortEntry(
            port=connection.laddr.port,
            protocol=protocol,
            pid=pid,
            process_name=name,
            executable_path=exe,
        )
    return sorted(entries.values(), key=lambda entry: entry.port)


def kill_processes_on_port(port: int) -> list[int]:
    pids = {
        connection.pid
        for connection in _net_connections()
        if connection.laddr and connection.laddr.port == port and connection.pid
    }
    if not pids:
        raise PortScanError(f"No process owns port {port}")

    killed: list[int] = []
    for pid in sorted(pids):
        try:
            psutil.Process(pid).kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.Error as exc:
            raise ProcessProviderError(f"Unable to terminate PID {pid} on port {port}: {exc}", pid=pid) from exc
        killed.append(pid)
    return killed


class PsutilPortProvider:
    """PortProvider running psutil scans off the event loop."""

    async def scan_ports(self) -> list[PortEntry]:
        entries = await asyncio.to_thread(scan_listening_ports)
        logger.debug("Port scan completed", count=len(entries))
        return entries

    async def kill_by_port(self, port: int) -> None:
        killed = await asyncio.to_thread(kill_processes_on_port, port)
        logger.info("Killed processes on port", port=port, pids=killed)


__all__ = ["PsutilPortProvider", "kill_processes_on_port", "scan_listening_ports"]

from __future__ import annotations

import asyncio
import os

import psutil

from toorker.palette.services import ProcessInfo
from toorker.utils import ProcessProviderError, get_logger


logger = get_logger(__name__)

_ATTRS = ["pid", "name", "memory_info", "exe"]


def list_running_processes() -> list[ProcessInfo]:
    results: list[ProcessInfo] = []
    for proc in psutil.process_iter(_ATTRS):
        info = proc.info
        name = info.get("name") or ""
        if not name:
            continue
        memory = info.get("memory_info")
        results.append(
            ProcessInfo(
                pid=info["pid"],
                name=name,
                memory_kb=memory.rss // 1024 if memory else 0,
                executable_path=info.get("exe") or None,
            )
        )
    return results


def terminate_process(pid: int) -> None:
    if pid == os.getpid():
        raise ProcessProviderError("Refusing to terminate the launcher itself", pid=pid)
    try:
        psutil.Process(pid).kill()
    except psutil.NoSuchProcess as exc:
        raise ProcessProviderError(f"Process {pid} no longer exists", pid=pid) from exc
    except psutil.Error as exc:
        raise ProcessProviderError(f"Unable to terminate process {pid}: {exc}", pid=pid) from exc


class PsutilProcessProvider:
    async def list_processes(self) -> list[ProcessInfo]:
        try:
            return await asyncio.to_thread(list_running_processes)
        except psutil.Error as exc:
            raise ProcessProviderError(f"Unable to list processes: {exc}") from exc

    async def kill_process(self, pid: int) -> None:
        await asyncio.to_thread(terminate_process, pid)
        logger.debug("Process terminated", pid=pid)


__all__ = ["PsutilProcessProvider", "list_running_processes", "terminate_process"]

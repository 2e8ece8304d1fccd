from __future__ import annotations

import os
from types import SimpleNamespace

import psutil
import pytest

from toorker.system import processes as processes_module
from toorker.system.processes import PsutilProcessProvider, list_running_processes, terminate_process
from toorker.utils import ProcessProviderError


class FakeProcess:
    def __init__(self, pid: int, error: Exception | None = None) -> None:
        self.pid = pid
        self.error = error
        self.killed = False

    def kill(self) -> None:
        if self.error is not None:
            raise self.error
        self.killed = True


def _proc(pid: int, name: str | None, rss: int | None = 2048, exe: str | None = None) -> SimpleNamespace:
    memory = SimpleNamespace(rss=rss) if rss is not None else None
    return SimpleNamespace(info={"pid": pid, "name": name, "memory_info": memory, "exe": exe})


def test_list_running_processes_skips_nameless_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        processes_module.psutil,
        "process_iter",
        lambda attrs: iter([_proc(1, "init", exe="/sbin/init"), _proc(2, ""), _proc(3, "zombie", rss=None)]),
    )

    result = list_running_processes()

    assert [(proc.pid, proc.name) for proc in result] == [(1, "init"), (3, "zombie")]
    assert result[0].memory_kb == 2
    assert result[0].executable_path == "/sbin/init"
    assert result[1].memory_kb == 0
    assert result[1].executable_path is None


def test_terminate_process_kills_target(monkeypatch: pytest.MonkeyPatch) -> None:
    created: dict[int, FakeProcess] = {}

    def factory(pid: int) -> FakeProcess:
        created[pid] = FakeProcess(pid)
        return created[pid]

    monkeypatch.setattr(processes_module.psutil, "Process", factory)

    terminate_process(321)

    assert created[321].killed


def test_terminate_process_refuses_own_pid() -> None:
    with pytest.raises(ProcessProviderError) as excinfo:
        terminate_process(os.getpid())

    assert excinfo.value.pid == os.getpid()


@pytest.mark.parametrize(
    "error",
    [psutil.NoSuchProcess(99), psutil.AccessDenied(99)],
)
def test_terminate_process_wraps_psutil_errors(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    monkeypatch.setattr(processes_module.psutil, "Process", lambda pid: FakeProcess(pid, error))

    with pytest.raises(ProcessProviderError) as excinfo:
        terminate_process(99)

    assert excinfo.value.pid == 99
    assert excinfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_provider_runs_listing_off_loop(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(processes_module.psutil, "process_iter", lambda attrs: iter([_proc(7, "bash")]))

    result = await PsutilProcessProvider().list_processes()

    assert [proc.name for proc in result] == ["bash"]


@pytest.mark.asyncio
async def test_provider_wraps_listing_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(attrs):
        raise psutil.AccessDenied()

    monkeypatch.setattr(processes_module.psutil, "process_iter", broken)

    with pytest.raises(ProcessProviderError):
        await PsutilProcessProvider().list_processes()

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from toorker.config.keybindings import get_keybinding
from toorker.system.port_intel import service_info
from toorker.tools.registry import TOOLS, ToolDefinition
from toorker.utils import ProviderError, get_logger

from .services import Navigator, PaletteServices, PortEntry, ToolSelection
from .types import Action, ActionKind


logger = get_logger(__name__)

NAVIGATION_SECTION = "Navigation"
TOOLS_SECTION = "Tools"
PORTS_SECTION = "Active Ports"
SHORTCUT_SLOTS = 9


def localhost_url(port: int) -> str:
    return f"http://localhost:{port}"


def _navigate(navigator: Navigator, tool_id: str | None, prefill_url: str | None = None):
    async def execute() -> None:
        await navigator.navigate(ToolSelection(tool_id=tool_id, prefill_url=prefill_url))

    return execute


def build_tool_actions(
    services: PaletteServices,
    tools: Sequence[ToolDefinition] = TOOLS,
    keybindings: Mapping[str, str] | None = None,
) -> list[Action]:
    """Home plus one navigate action per registered tool."""

    actions = [
        Action(
            id="nav-home",
            kind=ActionKind.NAVIGATE,
            label="Home",
            description="Back to tool overview",
            icon="Home",
            section=NAVIGATION_SECTION,
            keywords=("home", "dashboard", "overview", "all"),
            execute=_navigate(services.navigator, None),
        )
    ]
    for index, tool in enumerate(tools):
        shortcut = None
        if index < SHORTCUT_SLOTS:
            shortcut = get_keybinding(f"tool-{index + 1}", keybindings) or None
        actions.append(
            Action(
                id=f"nav-{tool.id}",
                kind=ActionKind.NAVIGATE,
                label=tool.name,
                description=tool.description,
                icon=tool.icon,
                section=TOOLS_SECTION,
                keywords=tool.keywords or (tool.name.lower(),),
                shortcut=shortcut,
                execute=_navigate(services.navigator, tool.id),
            )
        )
    return actions


def build_port_actions(services: PaletteServices, ports: Iterable[PortEntry]) -> list[Action]:
    """Kill / open-in-API-tester / copy-URL triple for every listening port."""

    actions: list[Action] = []
    seen: set[int] = set()
    for entry in ports:
        if entry.port in seen:
            continue
        seen.add(entry.port)
        process = entry.process_name.lower()
        port = str(entry.port)
        pid = str(entry.pid)
        service = service_info(entry.port, entry.process_name)
        url = localhost_url(entry.port)

        async def kill(port_number: int = entry.port) -> None:
            await services.ports.kill_by_port(port_number)

        async def copy(text: str = url) -> None:
            await services.clipboard.write_text(text)

        actions.append(
            Action(
                id=f"kill-port-{entry.port}",
                kind=ActionKind.PORT_ACTION,
                label=f"Kill port {entry.port}",
                description=f"{entry.process_name} (PID {entry.pid}) · {service.name}",
                icon="Trash2",
                section=PORTS_SECTION,
                keywords=("kill", "stop", "terminate", process, port, pid, service.name.lower()),
                execute=kill,
            )
        )
        actions.append(
            Action(
                id=f"open-api-{entry.port}",
                kind=ActionKind.COMMAND,
                label=f"Test localhost:{entry.port}",
                description=f"Open in API Tester · {entry.process_name}",
                icon="Send",
                section=PORTS_SECTION,
                keywords=("api", "test", "http", process, port, pid),
                execute=_navigate(services.navigator, "api-tester", url),
            )
        )
        actions.append(
            Action(
                id=f"copy-url-{entry.port}",
                kind=ActionKind.COMMAND,
                label=f"Copy localhost:{entry.port}",
                description=f"Copy URL to clipboard · {entry.process_name}",
                icon="Copy",
                section=PORTS_SECTION,
                keywords=("copy", "url", "localhost", process, port, pid),
                execute=copy,
            )
        )
    return actions


async def gather_actions(
    recent: Sequence[Action],
    services: PaletteServices,
    *,
    tools: Sequence[ToolDefinition] = TOOLS,
    keybindings: Mapping[str, str] | None = None,
) -> list[Action]:
    """Build the unranked candidate list for one palette session.

    A failing port scan only drops the port actions.
    """

    port_actions: list[Action] = []
    try:
        ports = await services.ports.scan_ports()
    except ProviderError as exc:
        logger.warning("Port scan unavailable; omitting port actions", error=str(exc))
    except Exception:  # noqa: BLE001 - a broken provider must not empty the palette
        logger.exception("Port scan failed unexpectedly; omitting port actions")
    else:
        port_actions = build_port_actions(services, ports)

    return [*build_tool_actions(services, tools, keybindings), *port_actions, *recent]


__all__ = [
    "NAVIGATION_SECTION",
    "PORTS_SECTION",
    "TOOLS_SECTION",
    "build_port_actions",
    "build_tool_actions",
    "gather_actions",
    "localhost_url",
]

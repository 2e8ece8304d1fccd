from __future__ import annotations

import pytest

from toorker.system.port_intel import PORT_DATABASE, ServiceCategory, service_info


def test_known_port_without_process_hint() -> None:
    info = service_info(5432, "mystery")

    assert info == PORT_DATABASE[5432]
    assert info.category is ServiceCategory.DATABASE


def test_known_port_with_process_hint_merges_description() -> None:
    info = service_info(3000, "node.exe")

    assert info.name == "Dev Server"
    assert info.description == "Node.js · Next.js, React, or Express"
    assert info.category is ServiceCategory.DEV


@pytest.mark.parametrize(
    ("port", "description"),
    [(4321, "Development server on :4321"), (12345, "Python3")],
)
def test_process_hint_on_unknown_port(port: int, description: str) -> None:
    info = service_info(port, "Python3")

    assert info.name == "Python"
    assert info.description == description


@pytest.mark.parametrize(
    ("port", "description", "category"),
    [
        (3456, "Development server", ServiceCategory.DEV),
        (8765, "HTTP service", ServiceCategory.INFRA),
        (49152, "Port 49152", ServiceCategory.SYSTEM),
    ],
)
def test_range_fallbacks(port: int, description: str, category: ServiceCategory) -> None:
    info = service_info(port, "helper.EXE")

    assert info.name == "helper"
    assert info.description == description
    assert info.category is category

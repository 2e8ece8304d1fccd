from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class KeyBinding:
    id: str
    label: str
    default_key: str


@dataclass(frozen=True, slots=True)
class KeyCombo:
    ctrl: bool
    shift: bool
    alt: bool
    key: str


DEFAULT_KEYBINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding("palette", "Command Palette", "Ctrl+K"),
    KeyBinding("settings", "Settings", "Ctrl+,"),
    *(KeyBinding(f"tool-{index}", f"Tool {index}", f"Ctrl+{index}") for index in range(1, 10)),
)


def get_keybinding(binding_id: str, overrides: Mapping[str, str] | None = None) -> str:
    """Return the user override for ``binding_id`` or its default combo."""

    if overrides and overrides.get(binding_id):
        return overrides[binding_id]
    for binding in DEFAULT_KEYBINDINGS:
        if binding.id == binding_id:
            return binding.default_key
    return ""


def parse_keybinding(combo: str) -> KeyCombo:
    parts = combo.split("+")
    return KeyCombo(
        ctrl="Ctrl" in parts,
        shift="Shift" in parts,
        alt="Alt" in parts,
        key=parts[-1] if parts else "",
    )


__all__ = ["DEFAULT_KEYBINDINGS", "KeyBinding", "KeyCombo", "get_keybinding", "parse_keybinding"]

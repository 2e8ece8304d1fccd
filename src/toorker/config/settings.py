from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "Toorker"
ENV_PREFIX = "TOORKER_"
ENV_FILE_NAME = "settings.env"
KEYBINDING_PREFIX = "KEYBINDING_"

DEFAULT_FEEDBACK_DWELL_MS = 900
DEFAULT_MAX_RECENT = 10
DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"
DEFAULT_IP_LOOKUP_TIMEOUT = 5.0


def _config_dir() -> Path:
    path = Path(user_config_dir(APP_NAME, roaming=True))
    path.mkdir(parents=True, exist_ok=True)
    return path


def _cache_dir() -> Path:
    path = Path(user_cache_dir(APP_NAME))
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_dir() -> Path:
    return _config_dir()


def cache_dir() -> Path:
    return _cache_dir()


def log_dir() -> Path:
    path = cache_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _env_file_path(explicit: Path | None) -> Path:
    if explicit is not None:
        return explicit
    return _config_dir() / ENV_FILE_NAME


@dataclass(slots=True)
class Settings:
    """Runtime preferences for the quick launcher palette."""

    feedback_dwell_ms: int = DEFAULT_FEEDBACK_DWELL_MS
    max_recent: int = DEFAULT_MAX_RECENT
    ip_lookup_url: str = DEFAULT_IP_LOOKUP_URL
    ip_lookup_timeout: float = DEFAULT_IP_LOOKUP_TIMEOUT
    log_level: str = "INFO"
    debug: bool = False
    keybindings: dict[str, str] = field(default_factory=dict)

    @property
    def feedback_dwell_seconds(self) -> float:
        return max(self.feedback_dwell_ms, 0) / 1000


class SettingsManager:
    """Load and persist palette settings with environment overrides."""

    def __init__(self, env_file: Path | None = None) -> None:
        self._env_file = _env_file_path(env_file)

    @property
    def env_file(self) -> Path:
        return self._env_file

    def load(self) -> Settings:
        """Load settings from environment, falling back to persisted file."""
        load_dotenv(self._env_file, override=False)

        settings = Settings()
        dwell = self._get_int("FEEDBACK_DWELL_MS")
        if dwell is not None:
            settings.feedback_dwell_ms = dwell
        max_recent = self._get_int("MAX_RECENT")
        if max_recent is not None and max_recent > 0:
            settings.max_recent = max_recent
        settings.ip_lookup_url = self._get_env("IP_LOOKUP_URL") or settings.ip_lookup_url
        timeout = self._get_env("IP_LOOKUP_TIMEOUT")
        if timeout:
            try:
                settings.ip_lookup_timeout = float(timeout)
            except ValueError:
                pass
        level = self._get_env("LOG_LEVEL")
        if level:
            settings.log_level = level.upper()
        settings.debug = (self._get_env("DEBUG") or "").lower() in {"1", "true", "yes"}
        settings.keybindings = self._get_keybindings_from_env()
        return settings

    def save(self, settings: Settings) -> None:
        """Persist settings to the managed env file."""
        self._env_file.parent.mkdir(parents=True, exist_ok=True)
        content = [
            f"{ENV_PREFIX}FEEDBACK_DWELL_MS={settings.feedback_dwell_ms}",
            f"{ENV_PREFIX}MAX_RECENT={settings.max_recent}",
            f"{ENV_PREFIX}IP_LOOKUP_URL={settings.ip_lookup_url}",
            f"{ENV_PREFIX}IP_LOOKUP_TIMEOUT={settings.ip_lookup_timeout}",
            f"{ENV_PREFIX}LOG_LEVEL={settings.log_level}",
            f"{ENV_PREFIX}DEBUG={'true' if settings.debug else 'false'}",
        ]
        for binding_id, combo in sorted(settings.keybindings.items()):
            key = binding_id.upper().replace("-", "_")
            content.append(f"{ENV_PREFIX}{KEYBINDING_PREFIX}{key}={combo}")
        self._env_file.write_text("\n".join(content) + "\n", encoding="utf-8")

    def _get_env(self, name: str) -> str | None:
        return os.getenv(f"{ENV_PREFIX}{name}") or None

    def _get_int(self, name: str) -> int | None:
        raw = self._get_env(name)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def _get_keybindings_from_env(self) -> dict[str, str]:
        prefix = f"{ENV_PREFIX}{KEYBINDING_PREFIX}"
        overrides: dict[str, str] = {}
        for name, value in os.environ.items():
            if not name.startswith(prefix) or not value:
                continue
            binding_id = name[len(prefix) :].lower().replace("_", "-")
            overrides[binding_id] = value.strip()
        return overrides


__all__ = [
    "APP_NAME",
    "Settings",
    "SettingsManager",
    "cache_dir",
    "config_dir",
    "log_dir",
]

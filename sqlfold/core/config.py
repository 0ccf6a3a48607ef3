"""Configuration management for the SQL editor folding engine."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "sqlfold"
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "settings" / "defaults.yaml"
USER_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"


class ConfigManager:
    """Loads default and user configuration and provides helpers to query values."""

    def __init__(self) -> None:
        self.defaults = self._load_yaml(DEFAULTS_PATH)
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if USER_SETTINGS_PATH.exists():
            self.user_settings = self._load_yaml(USER_SETTINGS_PATH)
        else:
            self.user_settings = {}
        self.settings = self._deep_merge(self.defaults, self.user_settings)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def save(self) -> None:
        USER_SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with USER_SETTINGS_PATH.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(self.settings, handle)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def folding(self) -> "FoldingSettings":
        return FoldingSettings.from_config(self)


@dataclass
class FoldingSettings:
    enabled: bool = True
    debounce_ms: int = 250
    preview_width: int = 40
    fold_all_on_open: bool = False

    @classmethod
    def from_config(cls, config: ConfigManager | dict[str, Any] | None) -> "FoldingSettings":
        """Read the ``folding`` section, keeping defaults for unusable values."""

        section = (config or {}).get("folding", {})
        if not isinstance(section, dict):
            return cls()
        settings = cls()
        settings.enabled = bool(section.get("enabled", settings.enabled))
        settings.fold_all_on_open = bool(section.get("fold_all_on_open", settings.fold_all_on_open))
        settings.debounce_ms = _non_negative_int(section.get("debounce_ms"), settings.debounce_ms)
        width = _non_negative_int(section.get("preview_width"), settings.preview_width)
        if width > 3:
            settings.preview_width = width
        return settings


def _non_negative_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    try:
        number = int(value)
    except (TypeError, ValueError):
        return fallback
    return number if number >= 0 else fallback

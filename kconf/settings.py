"""Settings management for kconf.

A single YAML file, ~/.k8sconf/config.yaml, tells kconf where the destination
kubeconfig lives. It is created with defaults on first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "~/.kube/config"


@dataclass
class SettingsPaths:
    """Standard paths for kconf state."""

    settings_dir: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths under the user's home directory."""
        return cls(settings_dir=Path.home() / ".k8sconf")

    @property
    def settings_file(self) -> Path:
        return self.settings_dir / "config.yaml"

    @property
    def log_file(self) -> Path:
        return self.settings_dir / "kconf.log.jsonl"


class AppSettings:
    """Reads kconf settings, writing the defaults when no file exists yet.

    Usage:
        settings = AppSettings()
        destination = settings.get_destination()  # Path, tilde expanded
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def defaults(self) -> dict[str, Any]:
        return {"destination": DEFAULT_DESTINATION}

    def load(self) -> dict[str, Any]:
        """Load settings, creating the settings file with defaults if missing."""
        path = self.paths.settings_file
        if not path.exists():
            settings = self.defaults()
            self._write(settings)
            logger.info(f"Created default settings at {path}")
            return settings

        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Failed to read settings file {path}: {e}") from e

        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")

        return {**self.defaults(), **content}

    def get_destination(self) -> Path:
        """Get the destination kubeconfig path."""
        destination = self.load().get("destination")
        if not isinstance(destination, str) or not destination.strip():
            raise SettingsError(f"'destination' in {self.paths.settings_file} must be a non-empty string")
        return Path(destination).expanduser()

    def _write(self, settings: dict[str, Any]) -> None:
        path = self.paths.settings_file
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(settings, f, default_flow_style=False)
        except OSError as e:
            raise SettingsError(f"Failed to write default settings {path}: {e}") from e

"""Dashboard configuration.

Loads from ~/.societyhub/config.yaml with environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

BACKENDS = ("sqlite", "rest")


class ConfigError(Exception):
    """Raised when the configuration cannot produce a working store."""


@dataclass
class Settings:
    """Configuration for the dashboard core and CLI."""

    backend: str = "sqlite"  # "sqlite" or "rest"
    db_path: Path = field(
        default_factory=lambda: Path.home() / ".societyhub" / "society.db",
    )
    rest_url: str = ""
    api_key: str = ""  # loaded from env only (never saved)
    autosave_delay: float = 1.0  # idle seconds before meeting minutes are saved
    request_timeout: float = 30.0
    log_level: str = "WARNING"

    CONFIG_FILE: Path = field(
        default_factory=lambda: Path.home() / ".societyhub" / "config.yaml",
        repr=False,
    )

    @classmethod
    def load(cls, config_path: Path | None = None) -> Settings:
        """Load settings from file and environment variables.

        Priority (highest wins):
          1. Environment variables (SOCIETYHUB_BACKEND, SOCIETYHUB_REST_URL, etc.)
          2. Config file (~/.societyhub/config.yaml or custom path)
          3. Defaults
        """
        settings = cls()
        file_path = config_path or settings.CONFIG_FILE

        if file_path.exists():
            try:
                with open(file_path) as f:
                    data = yaml.safe_load(f) or {}

                settings.backend = data.get("backend", settings.backend)
                settings.rest_url = data.get("rest_url", settings.rest_url)
                settings.autosave_delay = float(
                    data.get("autosave_delay", settings.autosave_delay)
                )
                settings.request_timeout = float(
                    data.get("request_timeout", settings.request_timeout)
                )
                settings.log_level = data.get("log_level", settings.log_level)
                if "db_path" in data:
                    settings.db_path = Path(data["db_path"]).expanduser()
            except (yaml.YAMLError, OSError, ValueError, AttributeError):
                logger.warning("Ignoring unreadable config file %s", file_path)

        settings.backend = os.environ.get("SOCIETYHUB_BACKEND", settings.backend)
        settings.rest_url = os.environ.get("SOCIETYHUB_REST_URL", settings.rest_url)
        settings.api_key = os.environ.get("SOCIETYHUB_API_KEY", settings.api_key)
        settings.log_level = os.environ.get("SOCIETYHUB_LOG_LEVEL", settings.log_level)

        if env_db := os.environ.get("SOCIETYHUB_DB_PATH"):
            settings.db_path = Path(env_db).expanduser()
        if env_delay := os.environ.get("SOCIETYHUB_AUTOSAVE_DELAY"):
            settings.autosave_delay = float(env_delay)
        if env_timeout := os.environ.get("SOCIETYHUB_REQUEST_TIMEOUT"):
            settings.request_timeout = float(env_timeout)

        return settings

    def validate(self) -> None:
        if self.backend not in BACKENDS:
            raise ConfigError(
                f"Unknown backend {self.backend!r} (expected one of: {', '.join(BACKENDS)})"
            )
        if self.backend == "rest" and not self.rest_url:
            raise ConfigError("rest backend needs SOCIETYHUB_REST_URL or rest_url in config")
        if self.autosave_delay <= 0:
            raise ConfigError("autosave_delay must be positive")

    def save(self, config_path: Path | None = None) -> None:
        """Save current settings to file. The API key is never written."""
        file_path = config_path or self.CONFIG_FILE
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "backend": self.backend,
            "db_path": str(self.db_path),
            "rest_url": self.rest_url,
            "autosave_delay": self.autosave_delay,
            "request_timeout": self.request_timeout,
            "log_level": self.log_level,
        }

        with open(file_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)

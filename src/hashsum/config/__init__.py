"""Configuration loading for hashsum."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import HashsumConfig, LoggingSettings, PipelineSettings, ToolSettings
from .resolver import resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.hashsum/config.yaml")
ENV_PREFIX = "HASHSUM__"


class ConfigManager:
    """Load configuration data, applying precedence rules.

    The configuration file is optional; a missing default file resolves to the
    built-in defaults, while a missing explicit file is an error.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._explicit = config_path is not None
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    def load(self, *, cli_overrides: Mapping[str, Any] | None = None) -> HashsumConfig:
        """Load configuration from disk and the environment, then apply CLI overrides."""
        return resolve_with_precedence(
            defaults=HashsumConfig(),
            file_overrides=self._read_file(),
            env_overrides=self._extract_env(),
            cli_overrides=cli_overrides,
        )

    # Internal helpers -------------------------------------------------

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            if self._explicit:
                raise ConfigError(f"Configuration file not found: {self._config_path}")
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Failed to read configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        return raw

    def _extract_env(self) -> dict[str, Any]:
        """Map `HASHSUM__SECTION__FIELD` variables to dotted `section.field` overrides."""
        overrides: dict[str, Any] = {}
        for key, raw_value in self._env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            dotted = ".".join(part.lower() for part in key[len(ENV_PREFIX) :].split("__"))
            try:
                overrides[dotted] = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                overrides[dotted] = raw_value
        return overrides


__all__ = [
    "ConfigManager",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "HashsumConfig",
    "LoggingSettings",
    "PipelineSettings",
    "ToolSettings",
    "resolve_with_precedence",
]

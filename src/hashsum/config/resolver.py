"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from typing import Any, Mapping

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import HashsumConfig

SECTIONS = tuple(HashsumConfig.model_fields)


def resolve_with_precedence(
    *,
    defaults: HashsumConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> HashsumConfig:
    """Apply overrides on top of ``defaults``; later sources win (file, environment, CLI).

    Every source maps either a section name (``tools``, ``pipeline``,
    ``logging``) to a mapping of field values, or a dotted ``section.field``
    key to a single value. Field names are checked when the result is validated.

    Raises:
        ConfigError: If a source names an unknown section or the merged values are invalid.
    """
    sections: dict[str, dict[str, Any]] = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        if not isinstance(source, MappingABC):
            raise ConfigError(f"{name.capitalize()} overrides must be a mapping.")
        for key, value in source.items():
            _apply(sections, key, value, source_name=name)

    try:
        return HashsumConfig.model_validate(sections)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def _apply(
    sections: dict[str, dict[str, Any]], key: Any, value: Any, *, source_name: str
) -> None:
    if not isinstance(key, str):
        raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
    section, _, field = key.partition(".")
    if section not in SECTIONS:
        raise ConfigError(
            f"Unknown configuration section '{section}' in {source_name} overrides; "
            f"expected one of: {', '.join(SECTIONS)}."
        )
    if field:
        sections[section][field] = value
    elif isinstance(value, MappingABC):
        sections[section].update(value)
    else:
        raise ConfigError(
            f"{source_name.capitalize()} override for section '{section}' must be a mapping."
        )


__all__ = ["resolve_with_precedence", "SECTIONS"]

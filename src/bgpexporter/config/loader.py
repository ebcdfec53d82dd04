from __future__ import annotations

from pathlib import Path
from typing import Any

from bgpexporter.core.errors import ConfigError
from bgpexporter.utils.yaml import load_yaml

from .settings import ExporterSettings


def _number(data: dict[str, Any], key: str, cast: type) -> Any:
    try:
        return cast(data[key])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {data[key]!r}") from exc


def _validate(settings: ExporterSettings) -> ExporterSettings:
    if settings.poll_interval <= 0:
        raise ConfigError(f"poll_interval must be positive, got {settings.poll_interval}")
    if settings.command_timeout <= 0:
        raise ConfigError(f"command_timeout must be positive, got {settings.command_timeout}")
    if not 1 <= settings.port <= 65535:
        raise ConfigError(f"port must be within 1-65535, got {settings.port}")
    if not settings.vtysh_bin or not settings.command:
        raise ConfigError("vtysh_bin and command must not be empty")
    return settings


def load_settings(path: Path | None = None, **overrides: Any) -> ExporterSettings:
    data: dict[str, Any] = {}
    if path is not None:
        try:
            data = load_yaml(path)
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Cannot load settings from {path}: {exc}") from exc

    data.update({k: v for k, v in overrides.items() if v is not None})
    unknown = sorted(set(data) - ExporterSettings.field_names())
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

    for key, cast in (("port", int), ("poll_interval", float), ("command_timeout", float)):
        if key in data:
            data[key] = _number(data, key, cast)
    for key in ("listen_address", "vtysh_bin", "command"):
        if key in data:
            data[key] = str(data[key])
    if data.get("container") is not None:
        data["container"] = str(data["container"])

    return _validate(ExporterSettings(**data))

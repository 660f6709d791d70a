"""Loading of the service configuration file."""

from __future__ import annotations

import configparser
from dataclasses import dataclass
from pathlib import Path

_ROOT = "__root__"


class ConfigError(Exception):
    """Raised when the configuration file is missing or incomplete."""


@dataclass(frozen=True)
class ServerConfig:
    """Address the HTTP server listens on."""

    host: str
    port: int


@dataclass(frozen=True)
class Config:
    """Settings of the whole service."""

    server: ServerConfig
    openai: str
    cache: str


def _root_keys(path) -> dict[str, str]:
    """Return the keys that stand before any section header."""
    parser = configparser.ConfigParser(interpolation=None, default_section="\x00", strict=False)
    parser.optionxform = str
    try:
        parser.read_string(f"[{_ROOT}]\n" + Path(path).read_text(encoding="utf-8"))
    except (OSError, configparser.Error) as exc:
        raise ConfigError(f"config error, cannot load {path}: {exc}") from exc
    keys = {}
    for key, value in parser.items(_ROOT):
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        keys[key] = value
    return keys


def _required(keys: dict[str, str], key: str, field: str) -> str:
    value = keys.get(key, "")
    if not value:
        raise ConfigError(f"config error, field '{field}' not found or not have values")
    return value


def load_config(path="./config.ini") -> Config:
    """Read and validate the configuration at *path*."""
    keys = _root_keys(path)
    host = _required(keys, "host", "host")
    try:
        port = int(keys.get("port", ""), 0)
    except ValueError:
        raise ConfigError("config error, field 'port' not found or not have values") from None
    openai = _required(keys, "openai", "api")
    cache = _required(keys, "cache", "cache")
    return Config(ServerConfig(host, port), openai, cache)
"""Environment-driven configuration for the desktop tool server."""
from __future__ import annotations

import importlib
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from tools.server import DEFAULT_SERVER_NAME, DEFAULT_SERVER_VERSION

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ServerConfig:
    """Simple container for server settings."""

    name: str = DEFAULT_SERVER_NAME
    version: str = DEFAULT_SERVER_VERSION
    log_level: str = DEFAULT_LOG_LEVEL
    sandbox_factory: Optional[str] = None


def _parse_log_level(raw: Optional[str], fallback: str) -> str:
    """Return a known logging level name parsed from *raw*, or *fallback*."""

    if raw is None:
        return fallback
    level = raw.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return fallback


def load_server_config() -> ServerConfig:
    """Load server settings from environment variables with safe fallbacks."""

    name = (os.getenv("DESKTOP_TOOLS_SERVER_NAME") or "").strip() or DEFAULT_SERVER_NAME
    version = (os.getenv("DESKTOP_TOOLS_SERVER_VERSION") or "").strip() or DEFAULT_SERVER_VERSION
    log_level = _parse_log_level(os.getenv("DESKTOP_TOOLS_LOG_LEVEL"), DEFAULT_LOG_LEVEL)
    sandbox_factory = (os.getenv("DESKTOP_TOOLS_SANDBOX") or "").strip() or None
    return ServerConfig(name=name, version=version, log_level=log_level, sandbox_factory=sandbox_factory)


def resolve_factory(path: str) -> Callable[[], Any]:
    """Import ``module:attribute`` and return the callable it names."""

    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"sandbox factory must look like 'module:attribute', got {path!r}")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part)
    if not callable(target):
        raise ValueError(f"{path!r} is not callable")
    return target


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "ServerConfig",
    "load_server_config",
    "resolve_factory",
]

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - IDENTITY_HEADER: request header carrying the acting username (default: 'username')
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level (default: INFO)
    - HOST: bind address used by `serve()` (default: 127.0.0.1)
    - PORT: bind port used by `serve()` (default: 8000)
    """

    identity_header: str
    cors_allow_origins: List[str]
    log_level: str
    host: str
    port: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_port(value: str, default: int = 8000) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    identity_header = _get_env("IDENTITY_HEADER", "username").strip().lower() or "username"

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"

    return Settings(
        identity_header=identity_header,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_port(_get_env("PORT", "8000")),
    )

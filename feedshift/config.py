"""Shared runtime settings for the CLI and server adapters.

This module owns environment-backed application settings. It is kept
separate from ``feedshift.core.config`` because core config stays minimal and
framework-agnostic.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    app_name: str
    debug: bool
    log_verbosity: str
    cors_allow_origins: tuple[str, ...]
    check_literal_overrides: bool


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _env_choice(name: str, default: str, *, allowed: set[str]) -> str:
    val = os.getenv(name)
    if val is None:
        return default
    normalized = val.strip().lower()
    if normalized in allowed:
        return normalized
    return default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = tuple(
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    )
    return Settings(
        app_name=os.getenv("APP_NAME", "Feedshift"),
        debug=_env_bool("DEBUG", default=False),
        log_verbosity=_env_choice(
            "LOG_VERBOSITY",
            default="medium",
            allowed={"low", "medium", "high", "extrahigh"},
        ),
        cors_allow_origins=origins or ("*",),
        check_literal_overrides=_env_bool("FEEDSHIFT_CHECK_LITERALS", default=True),
    )


__all__ = ["Settings", "get_settings"]

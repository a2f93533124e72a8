"""Core engine configuration.

Core config is side-effect free: it does not load dotenv files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CoreConfig:
    strict: bool = False
    max_workers: int = 1


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(1, int(raw.strip()))
    except ValueError:
        return default


def config_from_env(*, strict: bool | None = None, max_workers: int | None = None) -> CoreConfig:
    return CoreConfig(
        strict=_env_bool("FEEDSHIFT_STRICT", False) if strict is None else strict,
        max_workers=_env_int("FEEDSHIFT_MAX_WORKERS", 1) if max_workers is None else max(1, max_workers),
    )


__all__ = ["CoreConfig", "config_from_env"]

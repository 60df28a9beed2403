from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    proxy: str | None = None
    http2: bool = True
    user_agent: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            timeout_seconds=_parse_positive_float(
                "ORX_ENGINES_TIMEOUT_SECONDS",
                os.getenv("ORX_ENGINES_TIMEOUT_SECONDS"),
                DEFAULT_TIMEOUT_SECONDS,
            ),
            proxy=_optional(os.getenv("ORX_ENGINES_PROXY")),
            http2=_parse_bool(os.getenv("ORX_ENGINES_HTTP2"))
            if os.getenv("ORX_ENGINES_HTTP2") is not None
            else True,
            user_agent=_optional(os.getenv("ORX_ENGINES_USER_AGENT")),
            log_level=_parse_log_level(os.getenv("ORX_ENGINES_LOG_LEVEL")),
        )


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_positive_float(name: str, value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise RuntimeError(f"{name} must be greater than zero, got {value!r}")
    return parsed


def _parse_log_level(value: str | None) -> str:
    if value is None or not value.strip():
        return DEFAULT_LOG_LEVEL

    normalized = value.strip().upper()
    if normalized not in logging.getLevelNamesMapping():
        raise RuntimeError(f"ORX_ENGINES_LOG_LEVEL is not a log level: {value!r}")
    return normalized

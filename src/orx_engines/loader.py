"""Builds the engine registry at startup."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from orx_engines.engines import bing_videos
from orx_engines.registry import EngineRegistry

logger = logging.getLogger(__name__)

ENGINE_SETUPS: tuple[Callable[[EngineRegistry], None], ...] = (bing_videos.setup,)

_default_registry: EngineRegistry | None = None
_default_lock = threading.Lock()


def load_engines(registry: EngineRegistry | None = None) -> EngineRegistry:
    """Register every built-in engine into ``registry`` and freeze it."""
    registry = registry if registry is not None else EngineRegistry()
    for setup in ENGINE_SETUPS:
        setup(registry)
    registry.freeze()
    logger.info("Loaded engines: %s", ", ".join(registry.names()))
    return registry


def default_registry() -> EngineRegistry:
    """Process-wide registry, built on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = load_engines()
        return _default_registry

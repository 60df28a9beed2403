from __future__ import annotations

import logging
import threading
from typing import Literal

from orx_engines.base import Engine
from orx_engines.errors import EngineNotFoundError, RegistryError, RegistryFrozenError

Category = Literal["general", "images", "news", "videos"]

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Engines by name and by category.

    Populated once at startup, then frozen. After ``freeze()`` the registry
    is read-only and can be shared between threads without locking.

    Example:
        >>> registry = EngineRegistry()
        >>> registry.register(engine, "general")
        >>> registry.register(engine, "videos")
        >>> registry.freeze()
        >>> registry.engines_for("videos")
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._engines: dict[str, Engine] = {}
        self._by_category: dict[str, list[Engine]] = {}
        self._frozen = False

    def register(self, engine: Engine, category: Category) -> None:
        """Register an engine under a category.

        The same instance may be registered under any number of categories.

        Raises:
            RegistryFrozenError: If the registry has already been frozen.
            RegistryError: If a different engine already owns the name.
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register engine '{engine.name}': registry is frozen."
                )

            existing = self._engines.get(engine.name)
            if existing is not None and existing is not engine:
                raise RegistryError(
                    f"Engine name '{engine.name}' is already registered "
                    f"by {type(existing).__name__}."
                )

            self._engines[engine.name] = engine
            bucket = self._by_category.setdefault(category, [])
            if engine not in bucket:
                bucket.append(engine)
            logger.debug("Registered engine %s under %s", engine.name, category)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Engine:
        if name not in self._engines:
            raise EngineNotFoundError(
                f"Engine '{name}' not found. Available: {self.names()}"
            )
        return self._engines[name]

    def engines_for(self, category: Category) -> list[Engine]:
        return list(self._by_category.get(category, []))

    def categories_of(self, name: str) -> list[str]:
        engine = self.get(name)
        return [
            category
            for category, engines in self._by_category.items()
            if engine in engines
        ]

    def names(self) -> list[str]:
        return list(self._engines.keys())

    def categories(self) -> list[str]:
        return list(self._by_category.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._engines

from __future__ import annotations


class EngineError(Exception):
    """Base exception for search engine adapters."""


class InvalidOptionsError(EngineError, ValueError):
    pass


class ResponseShapeError(EngineError):
    """Raised when a response matches none of the known document envelopes."""

    def __init__(self, engine: str) -> None:
        super().__init__(
            f"failed to parse {engine} html: document shape not recognized"
        )
        self.engine = engine


class DocumentParseError(EngineError):
    """Raised when a response fragment cannot be parsed as markup at all."""


class RegistryError(EngineError):
    pass


class RegistryFrozenError(RegistryError):
    pass


class EngineNotFoundError(RegistryError, LookupError):
    pass


class TransportError(EngineError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

from orx_engines.errors import InvalidOptionsError

TimeRange = Literal["day", "week", "month", "year", ""]


@dataclass
class SearchOptions:
    """Per-request input shared by an engine's request and response steps.

    ``url`` is filled in by ``Engine.request`` for the caller to fetch.
    """

    query: str
    page_no: int = 1
    time_range: TimeRange = ""
    url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.query, str) or not self.query.strip():
            raise InvalidOptionsError("Search query is empty.")
        if not _is_positive_int(self.page_no):
            raise InvalidOptionsError(
                f"Page number must be a positive integer, got {self.page_no!r}."
            )


@dataclass(frozen=True)
class ResultItem:
    engine: str
    title: str
    url: str
    content: str
    query: str
    thumbnail: str = ""


@dataclass
class ResultSet:
    """Ordered results of one response parse, tagged with engine and page."""

    engine: str
    page_no: int
    items: list[ResultItem] = field(default_factory=list)

    def append(self, item: ResultItem) -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ResultItem]:
        return iter(self.items)


@runtime_checkable
class Engine(Protocol):
    name: str

    def request(self, options: SearchOptions) -> None: ...

    def response(self, options: SearchOptions, raw: bytes | str) -> ResultSet: ...


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1

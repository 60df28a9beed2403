from __future__ import annotations

import json
from collections.abc import Callable
from html import escape
from typing import Any

import pytest

ItemBuilder = Callable[..., str]


def _item_html(
    item_id: str,
    metadata: dict[str, Any] | str | None,
    info: str | None = "1.2M views",
    thumbnail: str | None = "https://tse1.mm.bing.net/th?id=OVP.1",
) -> str:
    parts = [f'<div id="{item_id}" class="mc_vtvc">']
    if thumbnail is not None:
        parts.append(f'<div class="mc_vtvc_th"><img src="{escape(thumbnail)}"></div>')
    if metadata is not None:
        raw = metadata if isinstance(metadata, str) else json.dumps(metadata)
        parts.append(f'<div class="vrhdata" vrhm="{escape(raw, quote=True)}"></div>')
    if info is not None:
        parts.append(f'<div class="mc_vtvc_meta_block"><span>{info}</span></div>')
    parts.append("</div>")
    return "".join(parts)


def video(n: int, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "du": f"{n}:00",
        "vt": f"Video {n}",
        "murl": f"https://www.youtube.com/watch?v=v{n}",
    }
    data.update(overrides)
    return data


@pytest.fixture
def standard_page() -> Callable[[list[str]], str]:
    def build(items: list[str]) -> str:
        return (
            "<html><head><title>Bing</title></head><body>"
            '<div id="b_header">header</div>'
            '<div class="dg_u">' + "".join(items) + "</div>"
            "</body></html>"
        )

    return build


@pytest.fixture
def first_page() -> Callable[[list[str]], str]:
    def build(items: list[str]) -> str:
        return (
            "<html><body>"
            '<div class="mc_fgvc_u">' + "".join(items) + "</div>"
            "</body></html>"
        )

    return build


@pytest.fixture
def standard_item() -> ItemBuilder:
    def build(n: int, metadata: Any = None, **kwargs: Any) -> str:
        return _item_html(
            f"mc_vtvc_video_{n}", video(n) if metadata is None else metadata, **kwargs
        )

    return build


@pytest.fixture
def first_page_item() -> ItemBuilder:
    def build(n: int, metadata: Any = None, **kwargs: Any) -> str:
        return _item_html(
            f"mc_vtvc__{n}", video(n) if metadata is None else metadata, **kwargs
        )

    return build


@pytest.fixture
def raw_item() -> Callable[..., str]:
    return _item_html


@pytest.fixture
def video_metadata() -> Callable[..., dict[str, Any]]:
    return video

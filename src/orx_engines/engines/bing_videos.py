"""Bing Videos engine: async content endpoint + HTML scraping."""

from __future__ import annotations

import enum
import json
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import urlencode

from lxml import etree, html  # type: ignore

from orx_engines.base import ResultItem, ResultSet, SearchOptions
from orx_engines.errors import DocumentParseError, ResponseShapeError
from orx_engines.registry import EngineRegistry
from orx_engines.utils import decode_body, is_http_url, normalize_text

logger = logging.getLogger(__name__)

ENGINE_NAME = "bing_videos"
BASE_URL = "https://www.bing.com/videos/asyncv2"
PAGE_SIZE = 10

# Recency filter in minutes; a month is counted as 31 days.
TIME_RANGE_MINUTES = MappingProxyType(
    {
        "day": 60 * 24,
        "week": 60 * 24 * 7,
        "month": 60 * 24 * 31,
        "year": 60 * 24 * 365,
    }
)


def _with_class(class_name: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {class_name} ')"


_VRHDATA_XPATH = f".//div[{_with_class('vrhdata')}]"
_META_BLOCK_XPATH = f".//div[{_with_class('mc_vtvc_meta_block')}]"
# spans directly under the block, not nested in another span of the block
_META_SPAN_XPATH = ".//span[count(ancestor::span) = $depth]"
_THUMBNAIL_XPATH = f".//div[{_with_class('mc_vtvc_th')}]//img/@src"


class Envelope(enum.Enum):
    """HTML layouts Bing serves for the same video results.

    The first page is sometimes rendered with a different container than
    later pages, and each layout needs its own item selector.
    """

    STANDARD = (
        re.compile(r'<div class="dg_u".*', re.DOTALL),
        "//div[@class='dg_u']//div[starts-with(@id, 'mc_vtvc_video')]",
    )
    FIRST_PAGE = (
        re.compile(r'<div class="mc_fgvc_u.*', re.DOTALL),
        "//div[starts-with(@id, 'mc_vtvc__')]",
    )

    def __init__(self, pattern: re.Pattern[str], item_xpath: str) -> None:
        self.pattern = pattern
        self.item_xpath = item_xpath


def isolate_fragment(body: str) -> tuple[Envelope, str]:
    """Return the matching envelope and the document tail it starts.

    Raises:
        ResponseShapeError: If no known envelope occurs in ``body``.
    """
    for envelope in Envelope:
        match = envelope.pattern.search(body)
        if match:
            return envelope, match.group(0)
    raise ResponseShapeError(ENGINE_NAME)


@dataclass(frozen=True)
class VideoMetadata:
    """The JSON object Bing embeds in each item's ``vrhm`` attribute."""

    title: str
    url: str
    duration: str = ""

    @classmethod
    def from_json(cls, raw: str | None) -> VideoMetadata | None:
        """Decode ``raw``; None when it is missing, malformed or incomplete."""
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError):
            return None
        if not isinstance(data, dict):
            return None

        title = _as_non_empty(data.get("vt"))
        url = _as_non_empty(data.get("murl"))
        if title is None or url is None:
            return None

        duration = _as_non_empty(data.get("du")) or ""
        return cls(title=title, url=url, duration=duration)


class BingVideosEngine:
    """Bing video search.

    Stateless: one instance serves any number of concurrent searches.
    """

    name = ENGINE_NAME

    def request(self, options: SearchOptions) -> None:
        # example: asyncv2?q=test&async=content&first=0&count=10
        params = {
            "q": options.query,
            "async": "content",
            "first": str((options.page_no - 1) * PAGE_SIZE),
            "count": str(PAGE_SIZE),
        }

        minutes = TIME_RANGE_MINUTES.get(options.time_range)
        if minutes is not None:
            params["form"] = "VRFLTR"
            params["qft"] = f" filterui:videoage-lt{minutes}"
        elif options.time_range:
            logger.debug("Ignoring unknown time range %r", options.time_range)

        options.url = f"{BASE_URL}?{urlencode(params)}"
        logger.debug("Built %s request url=%s", self.name, options.url)

    def response(self, options: SearchOptions, raw: bytes | str) -> ResultSet:
        envelope, fragment = isolate_fragment(decode_body(raw))
        logger.debug("Parsing %s response as %s", self.name, envelope.name)

        try:
            tree = html.fromstring(fragment)
        except (etree.ParserError, ValueError) as exc:
            raise DocumentParseError(
                f"failed to parse {self.name} html: {exc}"
            ) from exc

        results = ResultSet(engine=self.name, page_no=options.page_no)
        for block in tree.xpath(envelope.item_xpath):
            item = self._extract_item(block, options)
            if item is not None:
                results.append(item)

        return results

    def _extract_item(
        self, block: html.HtmlElement, options: SearchOptions
    ) -> ResultItem | None:
        holders = block.xpath(_VRHDATA_XPATH)
        if not holders:
            logger.debug("Skipping %s item without vrhdata", self.name)
            return None

        metadata = VideoMetadata.from_json(holders[0].get("vrhm"))
        if metadata is None:
            logger.debug("Skipping %s item with unusable metadata", self.name)
            return None
        if not is_http_url(metadata.url):
            logger.debug("Skipping %s item with bad url %r", self.name, metadata.url)
            return None

        info = _meta_text(block)
        content = " - ".join(part for part in (metadata.duration, info) if part)

        thumbnails = block.xpath(_THUMBNAIL_XPATH)
        thumbnail = str(thumbnails[0]).strip() if thumbnails else ""

        return ResultItem(
            engine=self.name,
            title=metadata.title,
            url=metadata.url,
            content=content,
            query=options.query,
            thumbnail=thumbnail,
        )


def setup(registry: EngineRegistry) -> None:
    engine = BingVideosEngine()
    registry.register(engine, "general")
    registry.register(engine, "videos")


def _meta_text(block: html.HtmlElement) -> str:
    texts: list[str] = []
    for meta in block.xpath(_META_BLOCK_XPATH):
        depth = len(meta.xpath("ancestor::span"))
        texts.extend(
            span.text_content() for span in meta.xpath(_META_SPAN_XPATH, depth=depth)
        )
    return normalize_text(" ".join(texts))


def _as_non_empty(value: object) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return None

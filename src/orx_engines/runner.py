from __future__ import annotations

import logging
from collections.abc import Callable

from orx_engines.base import Engine, ResultSet, SearchOptions

logger = logging.getLogger(__name__)

Fetch = Callable[[str], bytes]


def run_search(engine: Engine, options: SearchOptions, fetch: Fetch) -> ResultSet:
    """Build the engine URL, fetch it and parse the body.

    Errors from any step propagate unchanged.
    """
    engine.request(options)
    raw = fetch(options.url)
    results = engine.response(options, raw)
    logger.info(
        "%s returned %d results for page %d",
        engine.name,
        len(results),
        options.page_no,
    )
    return results

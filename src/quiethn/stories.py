"""
Concurrent top story fetching.

One fetch cycle loads the ranked item IDs, fetches the first ``n`` items
concurrently, puts them back in rank order and keeps only the stories that
carry a link.
"""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence
from urllib.parse import urlparse

import structlog

from quiethn.errors import FetchDeadlineExceeded, SourceUnavailable
from quiethn.protocols import EnrichedItem, FetchFailure, FetchResult, FetchSuccess, ItemSource, RawItem

logger = structlog.get_logger(__name__)


def derive_host(url: str) -> str:
    """Return the hostname of ``url`` without a leading ``www.``, or ``""``."""
    if not url:
        return ""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return ""
    if not hostname:
        return ""
    return hostname.removeprefix("www.")


def enrich(raw: RawItem) -> EnrichedItem:
    return EnrichedItem(item=raw, host=derive_host(raw.url))


def is_story_link(item: EnrichedItem) -> bool:
    return item.type == "story" and item.url != ""


async def fetch_top_stories(
    source: ItemSource,
    n: int,
    *,
    deadline: Optional[float] = None,
) -> List[EnrichedItem]:
    """
    Fetch the top ``n`` items from ``source`` and return the linked stories.

    Args:
        source: Item service to read the ranking and the items from
        n: Number of top ranked items to fetch
        deadline: Seconds the whole cycle may take (None = no limit)

    Returns:
        Stories with a link, in rank order

    Raises:
        SourceUnavailable: If the ranked ID list could not be loaded
        FetchDeadlineExceeded: If the cycle outlived ``deadline``
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    start_time = time.monotonic()
    try:
        async with asyncio.timeout(deadline):
            ids = await _load_ranking(source)
            if n > len(ids):
                logger.debug("Ranking shorter than requested, clamping", requested=n, available=len(ids))
                n = len(ids)
            results = await _fetch_all(source, ids[:n])
    except TimeoutError as e:
        logger.warning("Story fetch deadline exceeded", deadline=deadline, requested=n)
        raise FetchDeadlineExceeded(f"Fetching top stories took longer than {deadline}s", deadline=deadline) from e

    stories = [result.item for result in results if isinstance(result, FetchSuccess) and is_story_link(result.item)]

    logger.debug(
        "Fetched top stories",
        requested=n,
        stories=len(stories),
        duration=time.monotonic() - start_time,
    )
    return stories


async def _load_ranking(source: ItemSource) -> List[int]:
    try:
        return list(await source.list_top_item_ids())
    except Exception as e:
        logger.error("Failed to load top item IDs", error=str(e))
        raise SourceUnavailable("Failed to load top stories") from e


async def _fetch_all(source: ItemSource, ids: Sequence[int]) -> List[FetchResult]:
    """Fan out one task per ID and collect exactly one result from each."""
    completed: asyncio.Queue[FetchResult] = asyncio.Queue()

    async with asyncio.TaskGroup() as group:
        for index, item_id in enumerate(ids):
            group.create_task(_fetch_one(source, index, item_id, completed))
        results = [await completed.get() for _ in range(len(ids))]

    # Tasks finish in any order
    results.sort(key=lambda result: result.index)
    return results


async def _fetch_one(source: ItemSource, index: int, item_id: int, completed: asyncio.Queue[FetchResult]) -> None:
    result: FetchResult
    try:
        raw = await source.get_item(item_id)
    except Exception as e:
        result = FetchFailure(index=index, error=e)
    else:
        result = FetchSuccess(index=index, item=enrich(raw))
    completed.put_nowait(result)

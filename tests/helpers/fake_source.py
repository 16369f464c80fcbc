"""
In-memory item sources for exercising story fetch cycles.
"""

import asyncio
import random
from typing import Dict, Iterable, List, Optional

from quiethn.errors import HNClientError
from quiethn.protocols import RawItem


def make_item(item_id: int, *, type: str = "story", url: Optional[str] = None, title: Optional[str] = None) -> RawItem:
    """Build a raw item; stories link to ``https://example.com/<id>`` unless told otherwise."""
    if url is None:
        url = f"https://example.com/{item_id}"
    return RawItem(
        id=item_id,
        type=type,
        url=url,
        by=f"user{item_id}",
        title=title or f"Story {item_id}",
        score=item_id * 10,
        descendants=item_id,
    )


class ScriptedItemSource:
    """
    Item source with scripted per-ID outcomes.

    Items listed in ``failing`` raise, items listed in ``hanging`` never
    complete. Each fetch sleeps for a random delay up to ``max_delay`` so
    tasks finish out of rank order.
    """

    def __init__(
        self,
        items: Iterable[RawItem],
        *,
        ids: Optional[List[int]] = None,
        failing: Iterable[int] = (),
        hanging: Iterable[int] = (),
        ranking_error: Optional[Exception] = None,
        hang_ranking: bool = False,
        max_delay: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        self.items: Dict[int, RawItem] = {item.id: item for item in items}
        self.ids = ids if ids is not None else list(self.items)
        self.failing = set(failing)
        self.hanging = set(hanging)
        self.ranking_error = ranking_error
        self.hang_ranking = hang_ranking
        self.max_delay = max_delay
        self._random = random.Random(seed)

        self.requested: List[int] = []
        self.completed: List[int] = []
        self.cancelled: List[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_top_item_ids(self) -> List[int]:
        if self.hang_ranking:
            await asyncio.Event().wait()
        if self.ranking_error is not None:
            raise self.ranking_error
        return list(self.ids)

    async def get_item(self, item_id: int) -> RawItem:
        self.requested.append(item_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if item_id in self.hanging:
                await asyncio.Event().wait()
            await asyncio.sleep(self._random.uniform(0, self.max_delay))
            if item_id in self.failing or item_id not in self.items:
                raise HNClientError(f"Item {item_id} unavailable", url=f"item/{item_id}.json")
            self.completed.append(item_id)
            return self.items[item_id]
        except asyncio.CancelledError:
            self.cancelled.append(item_id)
            raise
        finally:
            self.in_flight -= 1

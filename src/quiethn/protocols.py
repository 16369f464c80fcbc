"""
Core contracts and data structures for quiethn.

Defines the records that flow through a story fetch cycle and the protocol
the cycle uses to talk to the Hacker News item service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple, Union

HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"


# ============================================================================
# Item Records
# ============================================================================


@dataclass(frozen=True)
class RawItem:
    """An item exactly as the item service describes it."""

    id: int
    type: str = ""
    url: str = ""
    by: str = ""
    title: str = ""
    text: str = ""
    score: int = 0
    time: int = 0
    descendants: int = 0
    kids: Tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> RawItem:
        """Build an item from an API payload, ignoring keys we don't know."""
        return cls(
            id=int(data["id"]),
            type=data.get("type") or "",
            url=data.get("url") or "",
            by=data.get("by") or "",
            title=data.get("title") or "",
            text=data.get("text") or "",
            score=int(data.get("score") or 0),
            time=int(data.get("time") or 0),
            descendants=int(data.get("descendants") or 0),
            kids=tuple(data.get("kids") or ()),
        )


@dataclass(frozen=True)
class EnrichedItem:
    """A raw item together with the host its link points at."""

    item: RawItem
    host: str = ""

    @property
    def id(self) -> int:
        return self.item.id

    @property
    def type(self) -> str:
        return self.item.type

    @property
    def url(self) -> str:
        return self.item.url

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def by(self) -> str:
        return self.item.by

    @property
    def score(self) -> int:
        return self.item.score

    @property
    def descendants(self) -> int:
        return self.item.descendants

    @property
    def comments_url(self) -> str:
        """Link to the discussion page on Hacker News."""
        return HN_ITEM_URL.format(id=self.item.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "host": self.host,
            "score": self.score,
            "by": self.by,
            "descendants": self.descendants,
            "comments_url": self.comments_url,
        }


# ============================================================================
# Fetch Results
# ============================================================================


@dataclass(frozen=True)
class FetchSuccess:
    """One item fetched and enriched at rank ``index``."""

    index: int
    item: EnrichedItem


@dataclass(frozen=True)
class FetchFailure:
    """The item at rank ``index`` could not be fetched."""

    index: int
    error: BaseException


FetchResult = Union[FetchSuccess, FetchFailure]


# ============================================================================
# Protocol Interfaces
# ============================================================================


class ItemSource(Protocol):
    """Protocol for the service that ranks and serves Hacker News items."""

    async def list_top_item_ids(self) -> List[int]:
        """Return the current top items, best first."""
        ...

    async def get_item(self, item_id: int) -> RawItem:
        """Return the full record for one item."""
        ...

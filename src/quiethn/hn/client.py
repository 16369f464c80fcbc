"""
Async client for the Hacker News Firebase API.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
import structlog

from quiethn.config.config import HNConfig
from quiethn.errors import HNClientError
from quiethn.protocols import RawItem

logger = structlog.get_logger(__name__)


class HNClient:
    """Reads the top story ranking and individual items from Hacker News."""

    def __init__(self, config: HNConfig):
        self.config = config

        # Session will be initialized in initialize()
        self.session: Optional[aiohttp.ClientSession] = None
        self._is_initialized = False

    async def initialize(self) -> None:
        """Initialize the HTTP client session."""
        if self.session is None:
            connector = aiohttp.TCPConnector(
                limit=0,  # Fan-out is bounded by the caller
                ttl_dns_cache=30,
                keepalive_timeout=30,
            )
            self.session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
            self._is_initialized = True
            logger.debug("HN client session initialized", base_url=self.config.base_url)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
        self._is_initialized = False
        logger.debug("HN client closed")

    async def __aenter__(self) -> "HNClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_json(self, path: str) -> Any:
        """GET ``path`` under the API base URL and decode the JSON body."""
        if not self._is_initialized or self.session is None:
            raise RuntimeError("HN client not initialized. Call initialize() first.")

        url = f"{self.config.base_url}/{path}"
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise HNClientError(
                        f"Unexpected status {response.status} from {url}",
                        url=url,
                        status=response.status,
                    )
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise HNClientError(f"Request to {url} failed: {e}", url=url) from e

    async def list_top_item_ids(self) -> List[int]:
        """Return the IDs of the current top stories, best first."""
        data = await self._get_json("topstories.json")
        if not isinstance(data, list):
            raise HNClientError(
                f"Unexpected top stories payload: {type(data).__name__}",
                url=f"{self.config.base_url}/topstories.json",
            )
        return [int(item_id) for item_id in data]

    async def get_item(self, item_id: int) -> RawItem:
        """Return the item with ``item_id``."""
        path = f"item/{item_id}.json"
        url = f"{self.config.base_url}/{path}"
        data: Optional[Dict[str, Any]] = await self._get_json(path)
        if data is None:
            # The API answers unknown IDs with a literal null
            raise HNClientError(f"Item {item_id} not found", url=url)
        if not isinstance(data, dict):
            raise HNClientError(f"Unexpected item payload: {type(data).__name__}", url=url)
        return RawItem.from_json(data)

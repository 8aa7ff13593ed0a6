"""Discord message search adapter.

Implements the core MessageSourcePort on top of the guild search endpoint.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

import aiohttp

from adapters.discord_mapper import messages_from_search
from core.config import MAX_SEARCH_PAGE_SIZE
from core.errors import TransportError
from core.models import RawMessage

LOGGER = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v9"


class DiscordMessageSource:
    """Reads an author's messages in one guild, one search page at a time."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        page_size: int = MAX_SEARCH_PAGE_SIZE,
        api_base: str = DISCORD_API_BASE,
    ) -> None:
        self._session = session
        self._page_size = page_size
        self._api_base = api_base.rstrip("/")

    def _endpoint(self, server_id: int) -> str:
        return f"{self._api_base}/guilds/{server_id}/messages/search"

    async def fetch_page(self, author_id: int, server_id: int, offset: int) -> List[RawMessage]:
        """Return the search page at ``offset``; an empty list ends the scan."""

        params = {
            "author_id": str(author_id),
            "include_nsfw": "true",
            "offset": str(offset),
            "limit": str(self._page_size),
        }
        try:
            async with self._session.get(self._endpoint(server_id), params=params) as response:
                # 202 means the guild is still being indexed; the body has no results.
                if response.status == 202:
                    raise TransportError(f"search index not ready for guild {server_id}")
                if response.status >= 400:
                    body = await response.text()
                    raise TransportError(f"search failed with HTTP {response.status}: {body}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"search request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"could not decode search response: {exc}") from exc

        try:
            messages = messages_from_search(payload)
        except ValueError as exc:
            raise TransportError(str(exc)) from exc
        LOGGER.debug("Fetched %s messages at offset %s", len(messages), offset)
        return messages

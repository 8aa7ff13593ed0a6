"""Discord message edit adapter.

Implements the core MessageEditorPort with a single PATCH per message.
"""

from __future__ import annotations

import asyncio

import aiohttp

from adapters.discord_search import DISCORD_API_BASE
from core.errors import EditError


class DiscordMessageEditor:
    """Overwrites message content; retries are left to the caller."""

    def __init__(self, session: aiohttp.ClientSession, api_base: str = DISCORD_API_BASE) -> None:
        self._session = session
        self._api_base = api_base.rstrip("/")

    def _endpoint(self, channel_id: int, message_id: int) -> str:
        return f"{self._api_base}/channels/{channel_id}/messages/{message_id}"

    async def edit_content(self, channel_id: int, message_id: int, content: str) -> None:
        """Replace the message content or raise EditError."""

        url = self._endpoint(channel_id, message_id)
        try:
            async with self._session.patch(url, json={"content": content}) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise EditError(channel_id, message_id, f"HTTP {response.status}: {body}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise EditError(channel_id, message_id, str(exc)) from exc

"""MediaWiki article source adapter.

Implements the core ArticleSourcePort with two read-only ``api.php`` queries:
one for a random main-namespace title and one for a plain-text extract.
"""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from core.errors import ContentSourceError


class MediaWikiArticleSource:
    """Fetches random articles from any MediaWiki ``api.php`` endpoint."""

    def __init__(self, session: aiohttp.ClientSession, api_url: str, excerpt_sentences: int = 10) -> None:
        self._session = session
        self._api_url = api_url
        self._excerpt_sentences = excerpt_sentences

    async def _query(self, params: dict[str, str]) -> Any:
        try:
            async with self._session.get(self._api_url, params=params) as response:
                if response.status >= 400:
                    raise ContentSourceError(f"article API returned HTTP {response.status}")
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ContentSourceError(f"article request failed: {exc}") from exc
        except ValueError as exc:
            raise ContentSourceError(f"could not decode article response: {exc}") from exc

    async def random_title(self) -> str:
        payload = await self._query(
            {
                "action": "query",
                "format": "json",
                "list": "random",
                "rnlimit": "1",
                "rnnamespace": "0",
            }
        )
        try:
            listing = payload["query"]["random"]
            return str(listing[0]["title"])
        except (KeyError, IndexError, TypeError) as exc:
            raise ContentSourceError("no random articles found") from exc

    async def fetch_extract(self, title: str) -> str:
        payload = await self._query(
            {
                "action": "query",
                "prop": "extracts",
                "exsentences": str(self._excerpt_sentences),
                "exlimit": "1",
                "titles": title,
                "explaintext": "1",
                "formatversion": "2",
                "format": "json",
            }
        )
        try:
            page = payload["query"]["pages"][0]
            extract = page["extract"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ContentSourceError(f"article not found: {title}") from exc
        if not isinstance(extract, str):
            raise ContentSourceError(f"article has no extract: {title}")
        return extract

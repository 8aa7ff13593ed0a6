"""Replacement content selection (core domain).

Content is produced in two stages: a random article excerpt, then local filler
text when the article source fails. The stage that produced the text is kept
internally so callers and logs can tell them apart, while ``generate`` always
returns plain text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from core.errors import ContentSourceError
from core.ports import ArticleSourcePort, FillerPort

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Excerpt:
    title: str
    extract: str


@dataclass(frozen=True)
class Filler:
    sentence: str


Outcome = Union[Excerpt, Filler]


def format_excerpt(title: str, extract: str) -> str:
    """Render an excerpt as a Markdown heading plus a quoted extract.

    MediaWiki plain-text extracts mark section headings with ``==``; those are
    turned into bold markers so they read sensibly in chat.
    """

    return f"# {title}\n\n> {extract.replace('==', '**')}\n"


def render(outcome: Outcome) -> str:
    if isinstance(outcome, Excerpt):
        return format_excerpt(outcome.title, outcome.extract)
    return outcome.sentence


class ContentProvider:
    """Produces replacement text, never raising past this boundary."""

    def __init__(self, articles: ArticleSourcePort, filler: FillerPort) -> None:
        self._articles = articles
        self._filler = filler

    async def _fetch_excerpt(self) -> Excerpt:
        title = await self._articles.random_title()
        extract = await self._articles.fetch_extract(title)
        return Excerpt(title=title, extract=extract)

    async def choose(self) -> Outcome:
        """Return the tagged outcome of the two-stage policy."""

        try:
            return await self._fetch_excerpt()
        except ContentSourceError as exc:
            LOGGER.warning("Failed to get article, falling back on filler text: %s", exc)
        return Filler(sentence=self._filler.sentence())

    async def generate(self) -> str:
        return render(await self.choose())

"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the message history, editing, storage,
and content adapters so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from core.models import RawMessage


class MessageSourcePort(Protocol):
    """Paginated, read-only view over an author's message history."""

    async def fetch_page(self, author_id: int, server_id: int, offset: int) -> Sequence[RawMessage]:
        ...


class MessageEditorPort(Protocol):
    """Replaces the content of one remote message."""

    async def edit_content(self, channel_id: int, message_id: int, content: str) -> None:
        ...


class RecordStorePort(Protocol):
    """Durable set of already processed (channel, message) pairs."""

    def exists(self, channel_id: int, message_id: int) -> bool:
        ...

    def insert(self, channel_id: int, message_id: int, content: str) -> None:
        ...


class ArticleSourcePort(Protocol):
    """Random encyclopedia entries used as primary replacement content."""

    async def random_title(self) -> str:
        ...

    async def fetch_extract(self, title: str) -> str:
        ...


class FillerPort(Protocol):
    """Local text generator used when the article source fails."""

    def sentence(self) -> str:
        ...

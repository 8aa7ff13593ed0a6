"""Core scan-dedup-rewrite loop.

This module is integration-agnostic. It only relies on ports for the message
history, editing, and storage, enabling other platforms or stores without
changes here.

Each cycle follows a strict order:
1) Sleep for the current delay
2) Fetch one search page at the current offset (back off on transport errors)
3) Stop when the page is empty
4) Skip messages that already have a processed record
5) Generate replacement content and edit the message
6) Record the message only after a confirmed edit
7) Advance the offset and shorten the delay
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from core.config import ScanConfig
from core.content import ContentProvider
from core.errors import EditError, TransportError
from core.models import RawMessage, ScanState, ScanSummary
from core.ports import MessageEditorPort, MessageSourcePort, RecordStorePort

LOGGER = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class ScanLoop:
    """Drives pagination, dedup, content generation, and edits."""

    def __init__(
        self,
        source: MessageSourcePort,
        editor: MessageEditorPort,
        store: RecordStorePort,
        content: ContentProvider,
        author_id: int,
        server_id: int,
        config: ScanConfig,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        self._source = source
        self._editor = editor
        self._store = store
        self._content = content
        self._author_id = author_id
        self._server_id = server_id
        self._config = config
        self._sleep = sleep or asyncio.sleep
        self.summary = ScanSummary()

    def initial_state(self) -> ScanState:
        return ScanState(offset=0, delay_seconds=self._config.initial_delay)

    async def run(self) -> ScanSummary:
        """Run cycles until the history is exhausted.

        A StoreError from the record store propagates to the caller.
        """

        state = self.initial_state()
        while not state.done:
            state = await self.run_cycle(state)
        LOGGER.info(
            "Got 'em all: pages=%s, seen=%s, rewritten=%s, already processed=%s, "
            "edit failures=%s, transport failures=%s",
            self.summary.pages,
            self.summary.messages_seen,
            self.summary.rewritten,
            self.summary.already_processed,
            self.summary.edit_failures,
            self.summary.transport_failures,
        )
        return self.summary

    async def run_cycle(self, state: ScanState) -> ScanState:
        """Run one sleep/fetch/process cycle and return the next state."""

        await self._sleep(state.delay_seconds)

        try:
            page = await self._source.fetch_page(self._author_id, self._server_id, state.offset)
        except TransportError as exc:
            self.summary.transport_failures += 1
            next_state = state.back_off(self._config.delay_increment)
            LOGGER.warning(
                "Failed to fetch page at offset %s (%s); retrying in %.1fs",
                state.offset,
                exc,
                next_state.delay_seconds,
            )
            return next_state

        if not page:
            LOGGER.info("Empty page at offset %s, no more matching history", state.offset)
            return state.finish()

        self.summary.pages += 1
        for message in page:
            self.summary.messages_seen += 1
            if self._store.exists(message.channel_id, message.message_id):
                self.summary.already_processed += 1
                LOGGER.info("Hit the back: %s/%s already processed", message.channel_id, message.message_id)
                if self._config.stop_on_processed:
                    return state.finish()
                continue
            await self._rewrite(message)

        return state.advance(self._config.page_size, self._config.delay_decrement)

    async def _rewrite(self, message: RawMessage) -> None:
        LOGGER.debug("Rewriting %s/%s: %r", message.channel_id, message.message_id, message.content)
        replacement = await self._content.generate()
        try:
            await self._editor.edit_content(message.channel_id, message.message_id, replacement)
        except EditError as exc:
            self.summary.edit_failures += 1
            LOGGER.warning("Failed to edit, skipping: %s", exc)
            return

        # Record only after the edit is confirmed; a StoreError here is fatal.
        self._store.insert(message.channel_id, message.message_id, message.content)
        self.summary.rewritten += 1
        LOGGER.info("Rewrote %s/%s", message.channel_id, message.message_id)

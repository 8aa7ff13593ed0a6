"""Error taxonomy shared by the core and adapters.

Adapters translate library exceptions into these types so the scan loop can
decide between backoff, skip, and abort without knowing about HTTP or SQLite.
"""

from __future__ import annotations


class PalimpsestError(Exception):
    """Base class for all palimpsest errors."""


class TransportError(PalimpsestError):
    """Network, auth, or decoding failure while reading message history."""


class ContentSourceError(PalimpsestError):
    """The article source could not produce an excerpt."""


class EditError(PalimpsestError):
    """A single message edit was rejected or could not be sent."""

    def __init__(self, channel_id: int, message_id: int, detail: str) -> None:
        super().__init__(f"edit failed for {channel_id}/{message_id}: {detail}")
        self.channel_id = channel_id
        self.message_id = message_id
        self.detail = detail


class StoreError(PalimpsestError):
    """The processed-record store failed to read or write durably."""

"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class MessageRef:
    """Identifies one remote message within a server."""

    channel_id: int
    message_id: int


@dataclass(frozen=True)
class RawMessage:
    """A message returned by a history search page."""

    channel_id: int
    message_id: int
    content: str

    @property
    def ref(self) -> MessageRef:
        return MessageRef(channel_id=self.channel_id, message_id=self.message_id)


@dataclass(frozen=True)
class ProcessedRecord:
    """Persisted marker for a message that has already been overwritten."""

    channel_id: int
    message_id: int
    content: str
    processed_at: str


def _round_delay(seconds: float) -> float:
    # Millisecond precision, so repeated decrements land exactly on zero.
    return round(seconds, 3)


@dataclass(frozen=True)
class ScanState:
    """In-memory scan position and polling delay.

    The state is threaded through each cycle instead of being mutated, so a
    cycle can be tested as (state, page) -> new state.
    """

    offset: int
    delay_seconds: float
    done: bool = False

    def advance(self, page_size: int, decrement: float) -> "ScanState":
        return replace(
            self,
            offset=self.offset + page_size,
            delay_seconds=_round_delay(max(0.0, self.delay_seconds - decrement)),
        )

    def back_off(self, increment: float) -> "ScanState":
        return replace(self, delay_seconds=_round_delay(self.delay_seconds + increment))

    def finish(self) -> "ScanState":
        return replace(self, done=True)


@dataclass
class ScanSummary:
    """Counters collected over a full scan, logged when the scan ends."""

    pages: int = 0
    messages_seen: int = 0
    rewritten: int = 0
    already_processed: int = 0
    edit_failures: int = 0
    transport_failures: int = 0

"""Discord-to-core message mapping adapter.

This keeps Discord's search payload shape out of the core pipeline.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from core.models import RawMessage

LOGGER = logging.getLogger(__name__)


def _unwrap_entry(entry: Any) -> Any:
    # Search results are grouped as [[hit], [hit], ...]; the hit is first.
    if isinstance(entry, list):
        return entry[0] if entry else None
    return entry


def message_from_entry(entry: Any) -> Optional[RawMessage]:
    """Build a RawMessage from one search entry, or None if it is malformed."""

    payload = _unwrap_entry(entry)
    if not isinstance(payload, dict):
        return None
    try:
        message_id = int(payload["id"])
        channel_id = int(payload["channel_id"])
    except (KeyError, TypeError, ValueError):
        return None
    content = payload.get("content")
    if not isinstance(content, str):
        content = ""
    return RawMessage(channel_id=channel_id, message_id=message_id, content=content)


def messages_from_search(payload: Any) -> List[RawMessage]:
    """Map a search response body to RawMessages in server order.

    Entries with missing or non-numeric ids are dropped rather than failing
    the whole page. A body without a ``messages`` list raises ValueError.
    """

    if not isinstance(payload, dict) or not isinstance(payload.get("messages"), list):
        raise ValueError("search response has no messages list")

    messages: List[RawMessage] = []
    for entry in payload["messages"]:
        message = message_from_entry(entry)
        if message is None:
            LOGGER.debug("Dropping malformed search entry: %r", entry)
            continue
        messages.append(message)
    return messages

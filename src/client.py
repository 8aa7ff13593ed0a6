"""HTTP client factory for palimpsest.

The session is created once and shared by the search, edit, and article
adapters. Callers own its lifecycle and close it when the scan ends.
"""

from __future__ import annotations

import logging
import os

import aiohttp
from dotenv import load_dotenv

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0"
REQUEST_TIMEOUT_SECONDS = 30


def build_session() -> aiohttp.ClientSession:
    """Create an aiohttp session authorized with DISCORD_TOKEN.

    We read the token via python-dotenv to keep secrets out of the repo.
    Must be called from inside a running event loop.
    """

    load_dotenv()

    token = os.getenv("DISCORD_TOKEN")
    # Fail fast on missing credentials to avoid a scan of 401 responses.
    if not token:
        raise RuntimeError("Missing DISCORD_TOKEN in environment")

    logging.getLogger(__name__).info("Initializing HTTP session")

    headers = {"Authorization": token, "User-Agent": USER_AGENT}
    timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)
    return aiohttp.ClientSession(headers=headers, timeout=timeout)


def _required_int(name: str) -> int:
    raw = os.getenv(name)
    if not raw:
        raise RuntimeError(f"Missing {name} in environment")
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a numeric id, got {raw!r}") from exc


def load_identity() -> tuple[int, int]:
    """Return (author_id, server_id) from DISCORD_AUTHOR / DISCORD_SERVER."""

    load_dotenv()
    return _required_int("DISCORD_AUTHOR"), _required_int("DISCORD_SERVER")

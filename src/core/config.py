"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_SEARCH_PAGE_SIZE = 25


@dataclass(frozen=True)
class ScanConfig:
    """Pagination and adaptive delay settings for the scan loop."""

    page_size: int = 25
    initial_delay: float = 1.0
    delay_increment: float = 0.5
    delay_decrement: float = 0.1
    stop_on_processed: bool = False

    def __post_init__(self) -> None:
        # Discord search returns at most 25 hits per request.
        if not 1 <= self.page_size <= MAX_SEARCH_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_SEARCH_PAGE_SIZE}, got {self.page_size}")


@dataclass(frozen=True)
class ContentConfig:
    """Replacement content settings consumed by the content adapters."""

    api_url: str = "https://en.uncyclopedia.co/w/api.php"
    excerpt_sentences: int = 10
    fallback_locale: str = "en_US"
    min_words: int = 8
    max_words: int = 16

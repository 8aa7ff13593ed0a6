"""Static configuration for palimpsest.

All user-editable settings (scan pacing, content source, database, logging)
live in a single JSON file for quick edits without touching Python. Secrets
and Discord ids stay in .env.
"""

import json
import os

from core.config import ContentConfig, ScanConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Scan pacing. Delays are in seconds; the delay grows on search failures and
# shrinks after every processed page, never below zero.
_scan = _CONFIG.get("scan", {})
SCAN = ScanConfig(
    page_size=int(_scan.get("page_size", 25)),
    initial_delay=float(_scan.get("initial_delay", 1.0)),
    delay_increment=float(_scan.get("delay_increment", 0.5)),
    delay_decrement=float(_scan.get("delay_decrement", 0.1)),
    stop_on_processed=bool(_scan.get("stop_on_processed", False)),
)

# Replacement content: MediaWiki endpoint first, Faker filler as fallback.
_content = _CONFIG.get("content", {})
CONTENT = ContentConfig(
    api_url=_content.get("api_url", ContentConfig.api_url),
    excerpt_sentences=int(_content.get("excerpt_sentences", 10)),
    fallback_locale=_content.get("fallback_locale", "en_US"),
    min_words=int(_content.get("min_words", 8)),
    max_words=int(_content.get("max_words", 16)),
)

# Where to store the SQLite database. DATABASE_PATH in .env wins so several
# checkouts can share one record set.
_database = _CONFIG.get("database", {})
DB_PATH = _database.get("path", "palimpsest.db")
if not os.path.isabs(DB_PATH):
    DB_PATH = os.path.join(PROJECT_ROOT, DB_PATH)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})

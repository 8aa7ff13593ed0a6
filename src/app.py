"""Application entry point for the palimpsest rewriter."""

from __future__ import annotations

import argparse
import asyncio
import csv
import json
import logging
import os
from dataclasses import asdict
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.discord_editor import DiscordMessageEditor
from adapters.discord_search import DiscordMessageSource
from adapters.faker_filler import FakerFiller
from adapters.mediawiki import MediaWikiArticleSource
from adapters.sqlite_storage import SQLiteRecordStore
from client import build_session, load_identity
from core.content import ContentProvider
from core.errors import StoreError
from core.models import ScanSummary
from core.scanner import ScanLoop

NAME = "PALIMPSEST"
FONT = "small"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/palimpsest.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _open_store() -> SQLiteRecordStore:
    load_dotenv()
    db_path = os.getenv("DATABASE_PATH") or settings.DB_PATH
    store = SQLiteRecordStore(db_path)
    store.init_db()
    return store


async def _scan(store: SQLiteRecordStore, author_id: int, server_id: int) -> ScanSummary:
    async with build_session() as session:
        content = ContentProvider(
            articles=MediaWikiArticleSource(
                session,
                api_url=settings.CONTENT.api_url,
                excerpt_sentences=settings.CONTENT.excerpt_sentences,
            ),
            filler=FakerFiller(
                locale=settings.CONTENT.fallback_locale,
                min_words=settings.CONTENT.min_words,
                max_words=settings.CONTENT.max_words,
            ),
        )
        loop = ScanLoop(
            source=DiscordMessageSource(session, page_size=settings.SCAN.page_size),
            editor=DiscordMessageEditor(session),
            store=store,
            content=content,
            author_id=author_id,
            server_id=server_id,
            config=settings.SCAN,
        )
        return await loop.run()


def _run() -> None:
    _print_banner()
    _configure_logging()

    LOGGER.info("Starting palimpsest")

    # Startup errors (missing ids, unreachable store) surface before the loop.
    author_id, server_id = load_identity()
    store = _open_store()
    LOGGER.info("%s messages already processed", store.count())

    try:
        asyncio.run(_scan(store, author_id, server_id))
    except StoreError:
        LOGGER.exception("Processed-message store failed, stopping")
        raise SystemExit(1)


def _stats() -> None:
    store = _open_store()
    print(f"{store.count()} messages processed")


def _export(fmt: str) -> None:
    rows = [asdict(record) for record in _open_store().list_records()]
    if not rows:
        print("No processed messages to export.")
        return
    exports_dir = os.path.join(settings.PROJECT_ROOT, "exports")
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    path = os.path.join(exports_dir, f"processed-{timestamp}.{fmt}")
    try:
        os.makedirs(exports_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            if fmt == "json":
                json.dump(rows, handle, indent=2, ensure_ascii=True)
            else:
                writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
                writer.writeheader()
                writer.writerows(rows)
    except OSError as exc:
        print(f"export failed: {exc.strerror or exc}")
        return
    print(f"exported {len(rows)} messages to {path}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="palimpsest")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Rewrite every unprocessed message, then exit")
    subparsers.add_parser("stats", help="Show how many messages have been processed")
    export_parser = subparsers.add_parser("export", help="Export processed messages to exports/")
    export_parser.add_argument("--format", choices=["csv", "json"], default="csv")

    args = parser.parse_args(argv)
    if args.command == "stats":
        _stats()
        return
    if args.command == "export":
        _export(args.format)
        return
    _run()


if __name__ == "__main__":
    main()

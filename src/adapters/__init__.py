"""Integration adapters: Discord HTTP, MediaWiki, Faker, and SQLite."""

"""Core domain package for palimpsest.

Core contains the scan loop, content selection, and dedup contracts without
any Discord, MediaWiki, or storage-specific code, keeping the business logic
portable.
"""

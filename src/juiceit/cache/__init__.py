"""Scan result caching."""

from juiceit.cache.scan_cache import CacheRecord, ScanCache

__all__ = ["CacheRecord", "ScanCache"]

"""Expiring in-memory cache."""

from .store import DEFAULT_CHECK_PERIOD, DEFAULT_TTL, CacheStats, TTLCache

__all__ = ["CacheStats", "DEFAULT_CHECK_PERIOD", "DEFAULT_TTL", "TTLCache"]

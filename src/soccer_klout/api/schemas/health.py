from __future__ import annotations

from soccer_klout.models import KloutModel


class CacheStatsResponse(KloutModel):
    hits: int
    misses: int
    key_count: int
    sets: int
    expired: int


class HealthResponse(KloutModel):
    status: str
    timestamp: str
    cache: CacheStatsResponse


class ErrorResponse(KloutModel):
    error: str
    code: str
    path: str | None = None

"""Pydantic models for API I/O."""

from .health import CacheStatsResponse, ErrorResponse, HealthResponse

__all__ = ["CacheStatsResponse", "ErrorResponse", "HealthResponse"]

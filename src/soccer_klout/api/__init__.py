"""REST API for player search, klout scores, leaderboards and comparisons."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from soccer_klout.api.schemas import CacheStatsResponse, ErrorResponse, HealthResponse
from soccer_klout.config import Settings
from soccer_klout.errors import InvalidRequestError, KloutError
from soccer_klout.models import (
    InfluenceScore,
    LeaderboardEntry,
    PlayerComparison,
    PlayerWithStats,
    SearchResponse,
)
from soccer_klout.providers import PlayerDataProvider, build_provider
from soccer_klout.service import COMPARE_USAGE, KloutService, parse_compare_request


logger = logging.getLogger("uvicorn.error")


def _error_response(status_code: int, message: str, code: str, path: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, path=path)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(KloutError)
    async def klout_error_handler(request: Request, exc: KloutError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error_response(400, message, InvalidRequestError.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unmatched routes and methods share one envelope.
        if exc.status_code in (404, 405):
            return _error_response(404, "Not found", "NOT_FOUND", path=request.url.path)
        if exc.status_code < 500:
            return _error_response(exc.status_code, str(exc.detail), InvalidRequestError.code)
        return _error_response(exc.status_code, str(exc.detail), "INTERNAL_SERVER_ERROR")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, str(exc) or "An unexpected error occurred", "INTERNAL_SERVER_ERROR")


def create_app(settings: Settings | None = None, provider: PlayerDataProvider | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    provider = provider or build_provider(settings)
    service = KloutService(provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        provider.cache.start()
        try:
            yield
        finally:
            provider.cache.stop()
            close = getattr(provider.source, "close", None)
            if callable(close):
                close()

    app = FastAPI(title="soccer klout", lifespan=lifespan)
    app.state.settings = settings
    app.state.provider = provider
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    _install_error_handlers(app)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="OK",
            timestamp=datetime.now(timezone.utc).isoformat(),
            cache=CacheStatsResponse(**asdict(provider.cache.stats())),
        )

    @app.get("/api/players", response_model=SearchResponse)
    def search_players(name: str | None = Query(None)) -> SearchResponse:
        if name is None or not name.strip():
            raise InvalidRequestError("Player name is required")
        return provider.search_players(name.strip())

    @app.get("/api/players/leaderboard/top", response_model=List[LeaderboardEntry])
    def leaderboard(
        limit: str | None = Query(None),
        league: str | None = Query(None),
        position: str | None = Query(None),
    ) -> List[LeaderboardEntry]:
        return service.leaderboard(limit, position=position or None, league=league or None)

    @app.get("/api/players/{player_id}/stats", response_model=PlayerWithStats)
    def player_stats(player_id: str) -> PlayerWithStats:
        if not player_id.strip().isdigit():
            raise InvalidRequestError("Player ID is required and must be a number")
        return provider.get_player_stats(player_id.strip())

    @app.get(
        "/api/players/{player_id}/klout",
        response_model=InfluenceScore,
        response_model_exclude_none=True,
    )
    def player_klout(
        player_id: str,
        position: str | None = Query(None),
        league: str | None = Query(None),
    ) -> InfluenceScore:
        return service.player_klout(player_id.strip(), position=position or None, league=league or None)

    @app.post("/api/players/compare", response_model=PlayerComparison)
    async def compare(request: Request) -> PlayerComparison:
        raw_body = await request.body()
        try:
            payload = json.loads(raw_body or b"null")
        except (ValueError, RecursionError) as exc:
            raise InvalidRequestError(COMPARE_USAGE) from exc
        compare_request = parse_compare_request(payload)
        return await run_in_threadpool(service.compare, compare_request.player_ids)

    return app

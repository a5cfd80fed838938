"""Error taxonomy surfaced to API callers as ``{error, code}``."""

from __future__ import annotations

import httpx


class KloutError(Exception):
    """Base error carrying a stable code and an HTTP status."""

    code = "UNKNOWN_ERROR"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class InvalidRequestError(KloutError):
    code = "INVALID_REQUEST"
    status_code = 400


class PlayerNotFoundError(KloutError):
    code = "PLAYER_NOT_FOUND"
    status_code = 404

    def __init__(self, player_id: str):
        super().__init__(f"Player with ID {player_id} not found")
        self.player_id = player_id


class UpstreamApiError(KloutError):
    code = "API_ERROR"


class UnknownApiError(KloutError):
    code = "UNKNOWN_ERROR"


def _upstream_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def handle_api_error(error: BaseException) -> KloutError:
    """Map any failure from a player source onto the error taxonomy."""

    if isinstance(error, KloutError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        message = _upstream_message(error.response) or str(error) or "API request failed"
        return UpstreamApiError(message, status_code=error.response.status_code)
    if isinstance(error, httpx.HTTPError):
        return UpstreamApiError(str(error) or "API request failed")
    return UnknownApiError(str(error) or "Unknown error occurred")

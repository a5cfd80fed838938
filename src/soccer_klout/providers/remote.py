"""HTTP-backed player source."""

from __future__ import annotations

import urllib.parse
from typing import Any, List

import httpx

from soccer_klout.models import PlayerRecord


class RemotePlayerSource:
    """Read player records from an upstream JSON service.

    The upstream exposes ``GET /players?name=``, ``GET /players?limit=`` and
    ``GET /players/{id}``; list endpoints answer with ``{"players": [...]}``
    using the same record shape as the demo dataset.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        headers = {"X-Auth-Token": api_key} if api_key else {}
        self._client = client or httpx.Client(base_url=base_url, headers=headers, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _get_list(self, params: dict[str, Any]) -> List[PlayerRecord]:
        resp = self._client.get("/players", params=params)
        resp.raise_for_status()
        body = resp.json()
        players = body.get("players", []) if isinstance(body, dict) else body
        return [PlayerRecord.from_payload(item) for item in players]

    def search(self, query: str) -> List[PlayerRecord]:
        return self._get_list({"name": query})

    def get_by_id(self, player_id: str) -> PlayerRecord | None:
        resp = self._client.get(f"/players/{urllib.parse.quote(player_id, safe='')}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return PlayerRecord.from_payload(resp.json())

    def get_top(self, limit: int) -> List[PlayerRecord]:
        return self._get_list({"limit": limit})[: max(0, limit)]

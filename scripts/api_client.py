"""Lightweight REST client for the soccer klout API."""

from __future__ import annotations

import argparse
import json

import httpx


def _show(resp: httpx.Response) -> None:
    if resp.is_error:
        try:
            body = resp.json()
        except ValueError:
            resp.raise_for_status()
        raise SystemExit(f"{body.get('code', 'ERROR')}: {body.get('error', resp.text)}")
    print(json.dumps(resp.json(), indent=2, ensure_ascii=False))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the soccer klout REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:5000/api")
    parser.add_argument("--search", metavar="NAME", help="Search players by name")
    parser.add_argument("--stats", metavar="PLAYER_ID", help="Fetch a player's profile and stats")
    parser.add_argument("--klout", metavar="PLAYER_ID", help="Fetch a player's influence score")
    parser.add_argument("--leaderboard", action="store_true", help="Fetch the top players leaderboard")
    parser.add_argument("--compare", nargs="+", metavar="PLAYER_ID", help="Compare 2-5 players")
    parser.add_argument("--limit", type=int, default=10, help="Leaderboard size")
    parser.add_argument("--position", default=None, help="Position weights for klout/leaderboard")
    parser.add_argument("--league", default=None, help="League weights for klout/leaderboard")
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    args = parser.parse_args()

    weight_params = {key: value for key, value in (("position", args.position), ("league", args.league)) if value}

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        if args.search:
            _show(client.get("/players", params={"name": args.search}))
        if args.stats:
            _show(client.get(f"/players/{args.stats}/stats"))
        if args.klout:
            _show(client.get(f"/players/{args.klout}/klout", params=weight_params))
        if args.leaderboard:
            _show(client.get("/players/leaderboard/top", params={"limit": args.limit, **weight_params}))
        if args.compare:
            _show(client.post("/players/compare", json={"playerIds": args.compare}))
        if not any((args.search, args.stats, args.klout, args.leaderboard, args.compare)):
            _show(client.get("/health"))


if __name__ == "__main__":
    main()

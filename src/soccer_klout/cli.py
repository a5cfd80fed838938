"""Command-line interface for searching, scoring and ranking players."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

import uvicorn
from pydantic import BaseModel

from soccer_klout.api import create_app
from soccer_klout.config import Settings, iter_leagues, iter_positions
from soccer_klout.errors import KloutError
from soccer_klout.providers import build_provider
from soccer_klout.service import DEFAULT_LEADERBOARD_LIMIT, KloutService


def _add_weight_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--position",
        default=None,
        help=f"Weight by position ({', '.join(iter_positions())})",
    )
    parser.add_argument(
        "--league",
        default=None,
        help=f"Weight by league ({', '.join(iter_leagues())})",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="soccer-klout", description="Soccer player influence scores")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    serve.add_argument("--port", type=int, default=None, help="Port to bind (default: $PORT or 5000)")

    search = subparsers.add_parser("search", help="Search players by name")
    search.add_argument("name", help="Full or partial player name")

    stats = subparsers.add_parser("stats", help="Show a player's profile and stats")
    stats.add_argument("player_id", help="Player ID")

    klout = subparsers.add_parser("klout", help="Compute a player's influence score")
    klout.add_argument("player_id", help="Player ID")
    _add_weight_filters(klout)

    leaderboard = subparsers.add_parser("leaderboard", help="Rank top players by influence")
    leaderboard.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LEADERBOARD_LIMIT,
        help="Number of players to rank (max 100)",
    )
    _add_weight_filters(leaderboard)

    compare = subparsers.add_parser("compare", help="Compare 2-5 players side by side")
    compare.add_argument("player_ids", nargs="+", help="Player IDs to compare")

    return parser


def _dump(result: Any) -> str:
    if isinstance(result, BaseModel):
        payload = result.model_dump(mode="json", by_alias=True)
    else:
        payload = [item.model_dump(mode="json", by_alias=True) for item in result]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _serve(settings: Settings, host: str, port: int | None) -> None:
    uvicorn.run(create_app(settings), host=host, port=port or settings.port)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()

    if args.command == "serve":
        _serve(settings, args.host, args.port)
        return 0

    provider = build_provider(settings)
    service = KloutService(provider)
    try:
        if args.command == "search":
            result = provider.search_players(args.name)
        elif args.command == "stats":
            result = provider.get_player_stats(args.player_id)
        elif args.command == "klout":
            result = service.player_klout(args.player_id, position=args.position, league=args.league)
        elif args.command == "leaderboard":
            result = service.leaderboard(args.limit, position=args.position, league=args.league)
        else:
            result = service.compare(args.player_ids)
    except KloutError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    print(_dump(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command line interface.

Usage:
    riftimpact account "Name#TAG"
    riftimpact history <puuid> [--count N]
    riftimpact analyze <match_id> [--puuid P]
    riftimpact recent [<puuid>] [--count N]
    riftimpact lifetime
    riftimpact clear {matches,classifications,identity,all}

Pass --metrics before the command to dump Prometheus counters to stderr.

Results are printed as JSON with the camelCase keys UI clients consume.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from riftimpact.config.settings import Settings, get_settings
from riftimpact.core.metrics import render_metrics
from riftimpact.core.observability import configure_logging
from riftimpact.core.ports.match_data_port import RiotAPIError
from riftimpact.core.services.performance_service import PerformanceAnalysisService

logger = logging.getLogger(__name__)

CLEAR_TARGETS = ("matches", "classifications", "identity", "all")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riftimpact",
        description="Time-weighted combat impact analysis for League of Legends matches",
    )
    parser.add_argument(
        "--metrics", action="store_true", help="Print Prometheus counters to stderr on exit"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    account = sub.add_parser("account", help="Resolve a Riot ID and remember it as tracked player")
    account.add_argument("riot_id", help="Riot ID in Name#TAG form")

    history = sub.add_parser("history", help="List recent match ids")
    history.add_argument("puuid")
    history.add_argument("--count", type=int, default=settings.default_match_count)

    analyze = sub.add_parser("analyze", help="Score a single match")
    analyze.add_argument("match_id")
    analyze.add_argument("--puuid", help="Tracked player (defaults to the last resolved account)")

    recent = sub.add_parser("recent", help="Score the latest matches")
    recent.add_argument("puuid", nargs="?", help="Defaults to the last resolved account")
    recent.add_argument("--count", type=int, default=settings.default_match_count)

    sub.add_parser("lifetime", help="Show lifetime impact category counts")

    clear = sub.add_parser("clear", help="Wipe cached data")
    clear.add_argument("target", choices=CLEAR_TARGETS)

    return parser


def _emit(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


async def _tracked_puuid(service: PerformanceAnalysisService, puuid: str | None) -> str | None:
    if puuid:
        return puuid
    account = await service.get_tracked_player()
    return account.puuid if account else None


async def run(args: argparse.Namespace, service: PerformanceAnalysisService) -> int:
    """Execute one parsed command. Returns the process exit code."""
    if args.command == "account":
        game_name, sep, tag_line = args.riot_id.rpartition("#")
        if not sep or not game_name or not tag_line:
            _emit({"error": "Riot ID must look like Name#TAG"})
            return 2
        account = await service.resolve_account(game_name, tag_line)
        if account is None:
            _emit({"error": f"Account {args.riot_id} not found"})
            return 1
        _emit(account.to_payload())
        return 0

    if args.command == "history":
        _emit(await service.get_match_history(args.puuid, args.count))
        return 0

    if args.command in ("analyze", "recent"):
        puuid = await _tracked_puuid(service, args.puuid)
        if puuid is None:
            _emit({"error": "No tracked player; pass a PUUID or resolve an account first"})
            return 2
        if args.command == "analyze":
            result = await service.analyze_match(args.match_id, puuid)
            _emit(result.to_payload())
            return 0 if result.success else 1
        results = await service.analyze_recent_matches(puuid, args.count)
        _emit([r.to_payload() for r in results])
        return 0 if all(r.success for r in results) else 1

    if args.command == "lifetime":
        _emit((await service.get_lifetime_stats()).to_payload())
        return 0

    if args.command == "clear":
        clearers = {
            "matches": service.clear_match_cache,
            "classifications": service.clear_classification_cache,
            "identity": service.clear_identity_cache,
            "all": service.clear_all_caches,
        }
        ok = await clearers[args.target]()
        _emit({"success": ok})
        return 0 if ok else 1

    raise ValueError(f"Unknown command: {args.command}")


async def _main_async(args: argparse.Namespace, settings: Settings) -> int:
    service = PerformanceAnalysisService.from_settings(settings)
    try:
        return await run(args, service)
    except RiotAPIError as e:
        logger.error(f"Command {args.command} failed: {e}")
        _emit({"error": str(e)})
        return 1
    finally:
        await service.close()
        if args.metrics:
            sys.stderr.write(render_metrics()[0].decode("utf-8"))


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings.app_log_level, settings.log_json)
    return asyncio.run(_main_async(args, settings))


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Mapping

import httpx
import requests

from fplsync.config import Settings
from fplsync.errors import SyncError
from fplsync.publish import GistPublisher, PublishResult
from fplsync.report.collect import run_collect
from fplsync.report.formatters import format_json

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logger = logging.getLogger("fplsync.sync")


def configure_logging(level_name: str = "INFO", *, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def run_sync(
    settings: Settings,
    *,
    dry_run: bool = False,
    out: str | None = None,
    json_pretty: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Any = None,
    session: requests.Session | None = None,
) -> dict:
    """Collect one snapshot and publish it (unless ``dry_run``).

    ``transport``, ``sleep`` and ``session`` are passed through to the fetch
    and publish layers.
    """
    client_kwargs: dict[str, Any] = {}
    if transport is not None:
        client_kwargs["transport"] = transport
    if sleep is not None:
        client_kwargs["sleep"] = sleep
    snapshot = asyncio.run(run_collect(settings, **client_kwargs))

    content = format_json(snapshot, pretty=json_pretty)
    if out:
        path = Path(out)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")
        logger.info("Wrote snapshot -> %s (%d bytes)", path, len(content))

    result: PublishResult | None = None
    if not dry_run:
        result = GistPublisher(settings, session=session).publish(snapshot, pretty=json_pretty)

    return {
        "league_id": snapshot.league_id,
        "league_name": snapshot.league_name,
        "current_gw": snapshot.current_gw,
        "members": len(snapshot.members),
        "members_without_history": sum(1 for m in snapshot.members if not m.history),
        "members_without_picks": sum(1 for m in snapshot.members if m.picks is None),
        "published": result is not None,
        "file_url": result.file_url if result else None,
        "owner_url": result.owner_url if result else None,
        "content": content,
    }


def _print_summary(summary: dict) -> None:
    print("Sync complete")
    print(f"   League:  {summary['league_name']}")
    print(f"   GW:      {summary['current_gw']}")
    print(f"   Members: {summary['members']}")
    if summary["file_url"]:
        print(f"   Gist URL: {summary['file_url']}")
    if summary["owner_url"]:
        print("Raw URL for the UI:")
        print(summary["owner_url"])


def main(
    argv: list[str] | None = None, env: Mapping[str, str] | None = None, **overrides: Any
) -> int:
    parser = argparse.ArgumentParser(
        description="Fetch FPL league standings, history and picks and publish them to a GitHub Gist"
    )
    parser.add_argument(
        "--league-id", default=None, help="FPL classic league id (default from FPL_LEAGUE_ID)"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Build the snapshot and print it; do not publish"
    )
    parser.add_argument("--out", default=None, help="Also write the snapshot JSON to this path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.set_defaults(json_pretty=True)
    parser.add_argument(
        "--json-compact",
        dest="json_pretty",
        action="store_false",
        help="Use compact JSON (no whitespace)",
    )
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(env, league_id=args.league_id)
    except SyncError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level, verbose=args.verbose)

    try:
        summary = run_sync(
            settings,
            dry_run=args.dry_run,
            out=args.out,
            json_pretty=args.json_pretty,
            **overrides,
        )
    except (SyncError, httpx.HTTPError, requests.RequestException) as e:
        logger.debug("Sync failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        print(summary["content"])
    else:
        _print_summary(summary)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Collection & assembly of one league snapshot."""

from __future__ import annotations

import asyncio
import datetime
import logging

from fplsync.api.batch import run_batched
from fplsync.api.client import FplClient, Sleep
from fplsync.compute import (
    build_snapshot,
    index_players,
    index_teams,
    parse_events,
    parse_members,
    select_current_event,
    select_next_event,
)
from fplsync.config import Settings
from fplsync.errors import SyncError

from .models import LeagueMember, Snapshot

logger = logging.getLogger(__name__)


def utc_timestamp(now: datetime.datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    now = now.astimezone(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _entry_id(member: LeagueMember) -> int:
    return member.entry_id


async def collect_snapshot(
    settings: Settings,
    client: FplClient,
    *,
    sleep: Sleep = asyncio.sleep,
    now: datetime.datetime | None = None,
) -> Snapshot:
    """Fetch everything for ``settings.league_id`` and build the snapshot.

    Standings and bootstrap data are required: any failure there propagates.
    Per-member history and picks are best-effort; members whose fetch failed
    are still listed, without that data.
    """
    league_id = settings.league_id
    logger.info("Fetching league %s", league_id)
    required = [
        asyncio.ensure_future(client.league_standings(league_id)),
        asyncio.ensure_future(client.bootstrap_static()),
    ]
    try:
        standings, bootstrap = await asyncio.gather(*required)
    except BaseException:
        # the client is closed on the way out; no request may outlive it
        for task in required:
            task.cancel()
        await asyncio.gather(*required, return_exceptions=True)
        raise

    league = standings.get("league") if isinstance(standings, dict) else None
    league_name = (league or {}).get("name") or settings.app_name
    members = parse_members(standings)
    if not members:
        raise SyncError(f"League {league_id}: no members found")
    logger.info("Found %d members in %s", len(members), league_name)

    events = parse_events(bootstrap)
    players = index_players(bootstrap)
    teams = index_teams(bootstrap)
    current = select_current_event(events)
    upcoming = select_next_event(events)
    logger.info(
        "Current GW: %s | deadline: %s | next GW: %s",
        current.id if current else None,
        current.deadline_time if current else None,
        upcoming.id if upcoming else None,
    )

    logger.info("Fetching history for %d members", len(members))
    history = await run_batched(
        members,
        _entry_id,
        lambda m: client.entry_history(m.entry_id),
        sleep=sleep,
        label="history entry",
    )

    picks_map: dict[int, object] = {}
    if current is not None and current.id:
        logger.info("Fetching GW%d picks for %d members", current.id, len(members))
        picks = await run_batched(
            members,
            _entry_id,
            lambda m: client.entry_picks(m.entry_id, current.id),
            sleep=sleep,
            label="picks entry",
        )
        picks_map = picks.values
        missing_picks = len(picks.errors)
    else:
        logger.info("No current gameweek; skipping picks")
        missing_picks = 0

    if history.errors or missing_picks:
        logger.warning(
            "Partial data: %d history and %d picks fetches failed",
            len(history.errors),
            missing_picks,
        )

    return build_snapshot(
        league_id=league_id,
        league_name=league_name,
        members=members,
        events=events,
        players=players,
        teams=teams,
        history_map=history.values,
        picks_map=picks_map,
        updated_at=utc_timestamp(now),
    )


async def run_collect(settings: Settings, **client_kwargs) -> Snapshot:
    """Open an FplClient for ``settings`` and collect one snapshot."""
    async with FplClient(settings.fpl_base_url, **client_kwargs) as client:
        return await collect_snapshot(settings, client, sleep=client_kwargs.get("sleep", asyncio.sleep))

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from fplsync.report.models import (
    Event,
    HistoryEntry,
    LeagueMember,
    MemberSnapshot,
    Pick,
    PickSet,
    Position,
    Snapshot,
    StaticPlayer,
    StaticTeam,
)


def _coerce_int(value: object, default: int | None = 0) -> int | None:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _rows(payload: Any, key: str) -> list[dict]:
    """Return ``payload[key]`` as a list of dicts, ignoring anything malformed."""
    if not isinstance(payload, Mapping):
        return []
    rows = payload.get(key)
    if not isinstance(rows, list):
        return []
    return [r for r in rows if isinstance(r, Mapping)]


def parse_events(bootstrap: Mapping[str, Any]) -> list[Event]:
    return [Event.from_api(e) for e in _rows(bootstrap, "events")]


def parse_members(standings: Mapping[str, Any]) -> list[LeagueMember]:
    """Standings rows from a ``leagues-classic`` payload (``standings.results``)."""
    if not isinstance(standings, Mapping):
        raise ValueError("league standings payload must be a mapping")
    return [LeagueMember.from_api(r) for r in _rows(standings.get("standings"), "results")]


def index_players(bootstrap: Mapping[str, Any]) -> dict[int, StaticPlayer]:
    if not isinstance(bootstrap, Mapping):
        raise ValueError("bootstrap-static payload must be a mapping")
    return {p.id: p for p in (StaticPlayer.from_api(e) for e in _rows(bootstrap, "elements"))}


def index_teams(bootstrap: Mapping[str, Any]) -> dict[int, StaticTeam]:
    if not isinstance(bootstrap, Mapping):
        raise ValueError("bootstrap-static payload must be a mapping")
    return {t.id: t for t in (StaticTeam.from_api(e) for e in _rows(bootstrap, "teams"))}


def select_current_event(events: Sequence[Event]) -> Event | None:
    """In-progress gameweek, else the last finished one, else the first known."""
    for ev in events:
        if ev.is_current:
            return ev
    for ev in reversed(events):
        if ev.finished:
            return ev
    return events[0] if events else None


def select_next_event(events: Sequence[Event]) -> Event | None:
    return next((ev for ev in events if ev.is_next), None)


def format_cost(now_cost: int | None) -> str:
    """Tenths of a million to a one-decimal string (125 -> "12.5")."""
    if not now_cost:
        return "0.0"
    return f"{now_cost / 10:.1f}"


def effective_points(event_points: int | None, multiplier: int | None) -> int:
    return (event_points or 0) * (multiplier or 0)


def build_history(payload: Any) -> list[HistoryEntry]:
    return [HistoryEntry.from_api(row) for row in _rows(payload, "current")]


def build_pick(
    raw: Mapping[str, Any],
    players: Mapping[int, StaticPlayer],
    teams: Mapping[int, StaticTeam],
) -> Pick:
    element = raw.get("element")
    player = players.get(element) if element is not None else None
    if player is None:
        player = StaticPlayer(id=element if isinstance(element, int) else 0)
    team = teams.get(player.team) if player.team is not None else None
    multiplier = _coerce_int(raw.get("multiplier"))
    return Pick(
        position=_coerce_int(raw.get("position"), None),
        is_captain=bool(raw.get("is_captain")),
        is_vice_captain=bool(raw.get("is_vice_captain")),
        multiplier=multiplier,
        web_name=player.web_name,
        team=team.short_name if team is not None else "",
        position_type=Position.from_code(player.element_type),
        points=effective_points(player.event_points, multiplier),
        total_points=player.total_points,
        cost=format_cost(player.now_cost),
        form=player.form,
    )


def build_pick_set(
    payload: Any,
    players: Mapping[int, StaticPlayer],
    teams: Mapping[int, StaticTeam],
) -> PickSet:
    chip = payload.get("active_chip") if isinstance(payload, Mapping) else None
    return PickSet(
        active_chip=chip or None,
        picks=[build_pick(p, players, teams) for p in _rows(payload, "picks")],
    )


def build_snapshot(
    *,
    league_id: str,
    league_name: str,
    members: Iterable[LeagueMember],
    events: Sequence[Event],
    players: Mapping[int, StaticPlayer],
    teams: Mapping[int, StaticTeam],
    history_map: Mapping[int, Any],
    picks_map: Mapping[int, Any],
    updated_at: str,
) -> Snapshot:
    """Join members with their fetched history and picks.

    Both maps hold raw per-entry payloads keyed by entry id. An absent key
    means that fetch failed; the member is still kept, with ``history=[]`` / ``picks=None``.
    """
    members = list(members)
    if players is None or teams is None:
        raise ValueError("static player and team tables are required")
    if not members:
        raise ValueError("cannot build a snapshot without league members")
    current = select_current_event(events)
    upcoming = select_next_event(events)
    return Snapshot(
        updated_at=updated_at,
        league_id=league_id,
        league_name=league_name,
        current_gw=(current.id or None) if current else None,
        deadline=current.deadline_time if current else None,
        next_gw=(upcoming.id or None) if upcoming else None,
        next_deadline=upcoming.deadline_time if upcoming else None,
        members=[
            MemberSnapshot(
                member=m,
                history=build_history(history_map.get(m.entry_id)),
                picks=_pick_set_or_none(picks_map.get(m.entry_id), players, teams),
            )
            for m in members
        ],
    )


def _pick_set_or_none(
    payload: Any,
    players: Mapping[int, StaticPlayer],
    teams: Mapping[int, StaticTeam],
) -> PickSet | None:
    if payload is None:
        return None
    return build_pick_set(payload, players, teams)

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


def _int(value: Any, default: int | None = 0) -> int | None:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _str(value: Any, default: str | None = "") -> str | None:
    if value is None or value == "":
        return default
    return str(value)


class Position(IntEnum):
    """FPL ``element_type`` codes."""

    UNKNOWN = 0
    GKP = 1
    DEF = 2
    MID = 3
    FWD = 4

    @classmethod
    def from_code(cls, code: Any) -> "Position":
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return "" if self is Position.UNKNOWN else self.name


@dataclass(frozen=True, slots=True)
class Event:
    id: int
    deadline_time: str | None = None
    is_current: bool = False
    is_next: bool = False
    finished: bool = False

    @classmethod
    def from_api(cls, raw: dict) -> "Event":
        return cls(
            id=_int(raw.get("id"), 0),
            deadline_time=_str(raw.get("deadline_time"), None),
            is_current=bool(raw.get("is_current")),
            is_next=bool(raw.get("is_next")),
            finished=bool(raw.get("finished")),
        )


@dataclass(frozen=True, slots=True)
class StaticTeam:
    id: int
    short_name: str = ""

    @classmethod
    def from_api(cls, raw: dict) -> "StaticTeam":
        return cls(id=_int(raw.get("id"), 0), short_name=_str(raw.get("short_name")))


@dataclass(frozen=True, slots=True)
class StaticPlayer:
    id: int
    web_name: str = "?"
    team: int | None = None
    element_type: int | None = None
    event_points: int = 0
    total_points: int = 0
    now_cost: int = 0
    form: str = "0"

    @classmethod
    def from_api(cls, raw: dict) -> "StaticPlayer":
        return cls(
            id=_int(raw.get("id"), 0),
            web_name=_str(raw.get("web_name"), "?"),
            team=_int(raw.get("team"), None),
            element_type=_int(raw.get("element_type"), None),
            event_points=_int(raw.get("event_points"), 0),
            total_points=_int(raw.get("total_points"), 0),
            now_cost=_int(raw.get("now_cost"), 0),
            form=_str(raw.get("form"), "0"),
        )


@dataclass(frozen=True, slots=True)
class LeagueMember:
    entry_id: int
    rank: int | None = None
    last_rank: int | None = None
    name: str | None = None
    player: str | None = None
    total_points: int | None = None
    current_gw_points: int | None = None

    @classmethod
    def from_api(cls, raw: dict) -> "LeagueMember":
        entry_id = _int(raw.get("entry"), None)
        if entry_id is None:
            raise ValueError(f"standings row without an entry id: {raw!r}")
        return cls(
            entry_id=entry_id,
            rank=_int(raw.get("rank"), None),
            last_rank=_int(raw.get("last_rank"), None),
            name=raw.get("entry_name"),
            player=raw.get("player_name"),
            total_points=_int(raw.get("total"), None),
            current_gw_points=_int(raw.get("event_total"), None),
        )


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    gameweek: int | None
    points: int | None
    cumulative_total: int | None
    rank: int | None
    active_chip: str | None = None

    @classmethod
    def from_api(cls, raw: dict) -> "HistoryEntry":
        return cls(
            gameweek=_int(raw.get("event"), None),
            points=_int(raw.get("points"), None),
            cumulative_total=_int(raw.get("total_points"), None),
            rank=_int(raw.get("rank"), None),
            active_chip=_str(raw.get("active_chip"), None),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "gw": self.gameweek,
            "points": self.points,
            "total": self.cumulative_total,
            "rank": self.rank,
            "chip": self.active_chip,
        }


@dataclass(frozen=True, slots=True)
class Pick:
    position: int | None
    is_captain: bool
    is_vice_captain: bool
    multiplier: int
    web_name: str
    team: str
    position_type: Position
    points: int
    total_points: int
    cost: str
    form: str

    def to_json(self) -> dict[str, Any]:
        return {
            "pos": self.position,
            "is_cap": self.is_captain,
            "is_vc": self.is_vice_captain,
            "mult": self.multiplier,
            "web_name": self.web_name,
            "team": self.team,
            "pos_type": self.position_type.label,
            "gw_pts": self.points,
            "total_pts": self.total_points,
            "cost": self.cost,
            "form": self.form,
        }


@dataclass(frozen=True, slots=True)
class PickSet:
    active_chip: str | None
    picks: list[Pick] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {"chip": self.active_chip, "picks": [p.to_json() for p in self.picks]}


@dataclass(slots=True)
class MemberSnapshot:
    member: LeagueMember
    history: list[HistoryEntry]
    picks: PickSet | None

    def to_json(self) -> dict[str, Any]:
        m = self.member
        return {
            "entry_id": m.entry_id,
            "rank": m.rank,
            "last_rank": m.last_rank,
            "name": m.name,
            "player": m.player,
            "total": m.total_points,
            "gw_points": m.current_gw_points,
            "history": [h.to_json() for h in self.history],
            "picks": self.picks.to_json() if self.picks is not None else None,
        }


@dataclass(slots=True)
class Snapshot:
    updated_at: str
    league_id: str
    league_name: str
    current_gw: int | None
    deadline: str | None
    next_gw: int | None
    next_deadline: str | None
    members: list[MemberSnapshot]

    def to_json_payload(self) -> dict[str, Any]:
        return {
            "updated_at": self.updated_at,
            "league_id": self.league_id,
            "league_name": self.league_name,
            "current_gw": self.current_gw,
            "deadline": self.deadline,
            "next_gw": self.next_gw,
            "next_deadline": self.next_deadline,
            "members": [m.to_json() for m in self.members],
        }

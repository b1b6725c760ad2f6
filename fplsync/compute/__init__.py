from . import core

build_history = core.build_history
build_pick = core.build_pick
build_pick_set = core.build_pick_set
build_snapshot = core.build_snapshot
effective_points = core.effective_points
format_cost = core.format_cost
index_players = core.index_players
index_teams = core.index_teams
parse_events = core.parse_events
parse_members = core.parse_members
select_current_event = core.select_current_event
select_next_event = core.select_next_event

__all__ = [
    "build_history",
    "build_pick",
    "build_pick_set",
    "build_snapshot",
    "effective_points",
    "format_cost",
    "index_players",
    "index_teams",
    "parse_events",
    "parse_members",
    "select_current_event",
    "select_next_event",
]

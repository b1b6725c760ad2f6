"""Schema checks for a published snapshot.

The UI reads the gist file directly, so any change in key names or value
types breaks it. ``validate_payload`` returns human-readable problems; an empty
list means the payload matches the published layout.
"""

from __future__ import annotations

import json
from typing import Any

from .constants import HISTORY_KEYS, MEMBER_KEYS, PICK_KEYS, SNAPSHOT_KEYS


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _check_keys(obj: Any, expected: tuple[str, ...], where: str) -> list[str]:
    if not isinstance(obj, dict):
        return [f"{where}: expected object, got {type(obj).__name__}"]
    errs = []
    missing = [k for k in expected if k not in obj]
    extra = [k for k in obj if k not in expected]
    if missing:
        errs.append(f"{where}: missing keys {missing}")
    if extra:
        errs.append(f"{where}: unexpected keys {extra}")
    return errs


def _validate_picks(picks: Any, where: str) -> list[str]:
    if picks is None:
        return []
    errs = _check_keys(picks, ("chip", "picks"), where)
    if errs:
        return errs
    if not isinstance(picks["picks"], list):
        return [f"{where}.picks: expected list"]
    for i, p in enumerate(picks["picks"]):
        pw = f"{where}.picks[{i}]"
        perrs = _check_keys(p, PICK_KEYS, pw)
        if perrs:
            errs.extend(perrs)
            continue
        if not isinstance(p["cost"], str):
            errs.append(f"{pw}.cost: expected string")
        if p["pos_type"] not in ("", "GKP", "DEF", "MID", "FWD"):
            errs.append(f"{pw}.pos_type: unknown value {p['pos_type']!r}")
        if not _is_int(p["gw_pts"]):
            errs.append(f"{pw}.gw_pts: expected integer")
    return errs


def validate_payload(payload: Any) -> list[str]:
    errs = _check_keys(payload, SNAPSHOT_KEYS, "snapshot")
    if errs:
        return errs
    if not isinstance(payload["league_id"], str):
        errs.append("snapshot.league_id: expected string")
    members = payload["members"]
    if not isinstance(members, list):
        return errs + ["snapshot.members: expected list"]
    seen: set[int] = set()
    for i, m in enumerate(members):
        where = f"members[{i}]"
        merrs = _check_keys(m, MEMBER_KEYS, where)
        if merrs:
            errs.extend(merrs)
            continue
        if not _is_int(m["entry_id"]):
            errs.append(f"{where}.entry_id: expected integer")
        elif m["entry_id"] in seen:
            errs.append(f"{where}.entry_id: duplicate {m['entry_id']}")
        else:
            seen.add(m["entry_id"])
        if not isinstance(m["history"], list):
            errs.append(f"{where}.history: expected list")
        else:
            for j, h in enumerate(m["history"]):
                errs.extend(_check_keys(h, HISTORY_KEYS, f"{where}.history[{j}]"))
        errs.extend(_validate_picks(m["picks"], f"{where}.picks"))
    return errs


def validate_file(path: str) -> list[str]:
    with open(path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            return [f"invalid JSON: {e}"]
    return validate_payload(payload)

"""Output format helpers for snapshots."""

from __future__ import annotations
import datetime
import json

from .models import Snapshot


def format_json(snapshot: Snapshot, *, pretty: bool = True) -> str:
    payload = snapshot.to_json_payload()
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def _display_time(updated_at: str) -> str:
    try:
        ts = datetime.datetime.fromisoformat(updated_at.replace("Z", "+00:00"))
    except ValueError:
        return updated_at
    return ts.astimezone(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def gist_description(snapshot: Snapshot, app_name: str) -> str:
    return f"{app_name} FPL Data — GW{snapshot.current_gw} — {_display_time(snapshot.updated_at)}"

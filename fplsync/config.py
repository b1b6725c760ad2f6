"""Run configuration.

Built once at process start from the environment (or any mapping) and passed
explicitly into the fetch and publish layers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from fplsync.errors import ConfigError
from fplsync.report.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_GIST_FILENAME,
    FPL_BASE_URL,
    GITHUB_API_URL,
)

REQUIRED_ENV = ("FPL_LEAGUE_ID", "GIST_ID", "GIST_TOKEN")


@dataclass(frozen=True)
class Settings:
    league_id: str
    gist_id: str
    gist_token: str = field(repr=False)
    fpl_base_url: str = FPL_BASE_URL
    github_api_url: str = GITHUB_API_URL
    gist_filename: str = DEFAULT_GIST_FILENAME
    app_name: str = DEFAULT_APP_NAME
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, *, league_id: str | None = None
    ) -> "Settings":
        """Read settings from ``env`` (defaults to ``os.environ``).

        ``league_id`` overrides ``FPL_LEAGUE_ID`` (CLI flag). All missing
        required names are reported together in a single ConfigError.
        """
        env = os.environ if env is None else env

        def _get(name: str, default: str = "") -> str:
            return (env.get(name) or default).strip()

        values = {name: _get(name) for name in REQUIRED_ENV}
        if league_id:
            values["FPL_LEAGUE_ID"] = league_id.strip()
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")
        if not values["FPL_LEAGUE_ID"].isdigit():
            raise ConfigError(
                f"FPL_LEAGUE_ID must be numeric, got {values['FPL_LEAGUE_ID']!r}"
            )

        return cls(
            league_id=values["FPL_LEAGUE_ID"],
            gist_id=values["GIST_ID"],
            gist_token=values["GIST_TOKEN"],
            fpl_base_url=_get("FPL_BASE_URL", FPL_BASE_URL).rstrip("/"),
            github_api_url=_get("GITHUB_API_URL", GITHUB_API_URL).rstrip("/"),
            gist_filename=_get("GIST_FILENAME", DEFAULT_GIST_FILENAME),
            app_name=_get("FPL_APP_NAME", DEFAULT_APP_NAME),
            log_level=_get("LOG_LEVEL", "INFO").upper(),
        )

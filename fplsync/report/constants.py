# constants.py
# Centralized constants for the sync job. The output keys are consumed by the UI; do not rename them.

FPL_BASE_URL = "https://fantasy.premierleague.com/api"
GITHUB_API_URL = "https://api.github.com"
GIST_RAW_HOST = "https://gist.githubusercontent.com"

DEFAULT_APP_NAME = "SSJ-Fantacy"
DEFAULT_GIST_FILENAME = "ssj-fpl-data.json"

# The FPL API rejects requests that do not look like they come from its own site.
FPL_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-GB,en;q=0.9",
    "Referer": "https://fantasy.premierleague.com/",
    "Origin": "https://fantasy.premierleague.com",
}

# Retry policy
MAX_ATTEMPTS = 3
RATE_LIMIT_BACKOFF_SEC = 3.0  # multiplied by the 1-based attempt number
TRANSPORT_RETRY_SEC = 2.0
REQUEST_TIMEOUT_SEC = 20.0

# Fan-out throttling
BATCH_SIZE = 4
BATCH_PAUSE_SEC = 0.5

PUBLISH_TIMEOUT_SEC = 30.0

SNAPSHOT_KEYS = (
    "updated_at",
    "league_id",
    "league_name",
    "current_gw",
    "deadline",
    "next_gw",
    "next_deadline",
    "members",
)
MEMBER_KEYS = (
    "entry_id",
    "rank",
    "last_rank",
    "name",
    "player",
    "total",
    "gw_points",
    "history",
    "picks",
)
HISTORY_KEYS = ("gw", "points", "total", "rank", "chip")
PICK_KEYS = (
    "pos",
    "is_cap",
    "is_vc",
    "mult",
    "web_name",
    "team",
    "pos_type",
    "gw_pts",
    "total_pts",
    "cost",
    "form",
)

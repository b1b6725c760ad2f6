"""Exception hierarchy shared by the fetch, publish and CLI layers."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for every error that should abort a sync run."""


class ConfigError(SyncError):
    """Required configuration is missing or malformed."""


class UpstreamError(SyncError):
    """Non-2xx response from the FPL API."""

    def __init__(self, status: int, path: str) -> None:
        self.status = status
        self.path = path
        super().__init__(f"FPL {status}: {path}")


class RateLimitedError(UpstreamError):
    """The final attempt for a request came back 429."""

    def __init__(self, path: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(429, path)
        self.args = (f"FPL 429: {path} (rate limited on final attempt of {attempts})",)


class PublishError(SyncError):
    """The Gist update was rejected."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"Gist update failed: {status} - {body}")

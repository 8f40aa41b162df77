# errors.py

# Failures that affect a whole request. Per-page failures are never raised:
# they are recorded on the ExtractedPage instead.


class DeepSearchError(Exception):
    """Base class for request-level failures."""


class ConfigError(DeepSearchError):
    """Required configuration is missing or invalid. Fatal at startup."""


class SearchError(DeepSearchError):
    """The upstream search provider call failed (auth, rate limit, transport, non-2xx)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class BrowserLaunchError(DeepSearchError):
    """The headless browser could not be started."""

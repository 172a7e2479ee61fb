"""Exception types raised across the search pipeline."""


class TrademarkEvidenceError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TrademarkEvidenceError, ValueError):
    """Required credentials or settings are missing."""


class ProviderError(TrademarkEvidenceError):
    """A search provider failed with something other than a rate limit.

    Args:
        message: Human-readable description.
        provider: Provider name (e.g. "google", "claude").
        status_code: HTTP status, when the failure was an HTTP response.
    """

    def __init__(self, message: str, *, provider: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class RateLimited(TrademarkEvidenceError):
    """The provider answered 429; pagination should stop gracefully."""


class FetchFailure(TrademarkEvidenceError):
    """A source page could not be fetched for date inspection."""


class SearchFailedError(TrademarkEvidenceError):
    """Every search method failed. The message is safe to show to a user."""

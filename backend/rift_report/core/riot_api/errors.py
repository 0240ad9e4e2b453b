"""Custom error classes for Riot API client."""

from typing import Optional, Dict, Any


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 401, 403, 404, 429, 503, etc.)
            response_data: Raw response data from API
            retry_after: Seconds to wait before retry (for 429 errors)
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.retry_after: Optional[float] = retry_after
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code == 429 and self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"

    # Helper methods for error type checking
    def is_rate_limit(self) -> bool:
        """Check if this is a rate limit error (429)."""
        return self.status_code == 429

    def is_not_found(self) -> bool:
        """Check if this is a not found error (404)."""
        return self.status_code == 404

    def is_server_error(self) -> bool:
        """Check if this is a server error (5xx)."""
        return self.status_code is not None and self.status_code >= 500


class UpstreamError(RiotAPIError):
    """Non-success response from the upstream; carries status and raw body."""

    def __init__(self, status_code: int, body: str, url: Optional[str] = None) -> None:
        super().__init__(
            body or (url or "Upstream request failed"),
            status_code=status_code,
            response_data={"body": body, "url": url},
        )
        self.body = body
        self.url = url


class NotFoundError(UpstreamError):
    """Not found error (404) - resource doesn't exist."""

    pass


class RateLimitExhaustedError(UpstreamError):
    """429 persisted after every retry granted to the request."""

    def __init__(
        self, body: str, retry_after: float, url: Optional[str] = None
    ) -> None:
        super().__init__(429, body, url)
        self.retry_after = retry_after


class RequestTimeoutError(RiotAPIError):
    """The request exceeded its deadline and was aborted."""

    def __init__(self, url: str, timeout_ms: int) -> None:
        super().__init__(f"Request timed out after {timeout_ms}ms: {url}")
        self.url = url
        self.timeout_ms = timeout_ms

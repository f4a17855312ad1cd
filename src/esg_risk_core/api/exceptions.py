class ESGApiError(Exception):
    """Base error for failed ESG Monitoring API calls.

    ``status_code`` and ``endpoint`` identify the failing call when known.
    """

    retryable = False

    def __init__(
        self, message: str, status_code: int | None = None, endpoint: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class RateLimitError(ESGApiError):
    retryable = True

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: float | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message, status_code=429, endpoint=endpoint)
        self.retry_after = retry_after


class AuthenticationError(ESGApiError):
    def __init__(
        self, message: str = "Invalid or expired API key", endpoint: str | None = None
    ) -> None:
        super().__init__(message, status_code=401, endpoint=endpoint)


class ResourceNotFoundError(ESGApiError):
    def __init__(self, endpoint: str) -> None:
        super().__init__(f"Resource not found: {endpoint}", status_code=404, endpoint=endpoint)


class ServerError(ESGApiError):
    """The API answered with a 5xx status; the call may succeed if repeated later."""

    retryable = True

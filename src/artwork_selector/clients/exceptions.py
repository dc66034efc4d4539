"""Custom exceptions for network clients."""


class FetchError(Exception):
    """Base exception for all failures to fetch a page of records.

    Attributes:
        message: Human-readable description of the failure
        page: Page number being fetched, when known
    """

    def __init__(self, message: str, *args, page: int | None = None, **kwargs):
        self.message = message
        self.page = page
        super().__init__(message, *args, **kwargs)


class ConnectionError(FetchError):
    """Raised when a network connection fails."""

    pass


class RequestTimeoutError(ConnectionError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, message: str, timeout: float, *args, **kwargs):
        self.timeout = timeout
        super().__init__(message, *args, **kwargs)


class APIError(FetchError):
    """Raised when the API returns a non-2xx response."""

    def __init__(self, message: str, status_code: int, *args, **kwargs):
        self.status_code = status_code
        super().__init__(message, *args, **kwargs)


class RateLimitError(APIError):
    """Raised when the API returns a 429 rate limit response."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(APIError):
    """Raised when the API returns a 404 not found response."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(FetchError):
    """Raised when response data fails schema validation."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)

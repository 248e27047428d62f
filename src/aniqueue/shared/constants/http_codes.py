"""HTTP constants used by the AniList and web search clients."""


class HTTPStatusCodes:
    """Status codes the clients branch on."""

    UNAUTHORIZED = 401
    FORBIDDEN = 403
    TOO_MANY_REQUESTS = 429

    @staticmethod
    def is_success(code: int) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= code < 300

    @staticmethod
    def is_server_error(code: int) -> bool:
        """Check if status code indicates server error (5xx)."""
        return 500 <= code < 600

    @staticmethod
    def is_retryable(code: int) -> bool:
        """Rate limits and server errors are worth another attempt."""
        return code == HTTPStatusCodes.TOO_MANY_REQUESTS or HTTPStatusCodes.is_server_error(code)


class HTTPHeaders:
    """Common HTTP header names."""

    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"
    RETRY_AFTER = "Retry-After"


class ContentTypes:
    """Common content type values."""

    APPLICATION_JSON = "application/json"

"""
Domain exceptions for the OAuth2 client.

These exceptions are raised by the client and provider adapters and are
caught by centralized exception handlers in main.py.
"""


class OAuthClientError(Exception):
    """Base exception for OAuth2 client errors."""

    pass


class ParseError(OAuthClientError):
    """
    Raised when a provider response body cannot be parsed.

    Covers invalid JSON, a missing or empty envelope and missing
    required fields. Not retried.
    """

    pass


class UnexpectedResponseError(OAuthClientError):
    """
    Raised when the provider reports an error.

    This covers the `error` callback parameter, error bodies and
    non-2xx responses from the token or user-info endpoints.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(OAuthClientError):
    """Raised when the HTTP request could not be completed (network issue)."""

    pass

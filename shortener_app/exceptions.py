"""Application errors for the URL shortener.

Every error carries the HTTP status it maps to, so the API layer can turn
any of them into a ``{"error": message}`` response with one handler.

Classes:
    ShortenerError:
        Base class for all application errors.

    InvalidInput:
        Malformed body, URL or short code (400).

    Conflict:
        The short code is already taken (409).

    NotFound:
        No record matches the short code (404).

    StoreUnavailable:
        The relational store or the cache failed (500).

    StoreNotConfigured:
        A store handle is missing from the configuration (500).

Example:
    >>> from shortener_app.exceptions import NotFound
    >>> raise NotFound("URL not found")
    Traceback (most recent call last):
        ...
    shortener_app.exceptions.NotFound: URL not found
"""

from fastapi import status


class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ShortenerError):
    """Raised when the request body, URL or short code is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Conflict(ShortenerError):
    """Raised when a short code already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Short code already exists"


class NotFound(ShortenerError):
    """Raised when no record matches the short code."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "URL not found"


class StoreUnavailable(ShortenerError):
    """Raised when the relational store fails (connection issues, timeouts, etc.)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Store unavailable"


class StoreNotConfigured(StoreUnavailable):
    """Raised when a store handle is absent from the configuration."""

    default_message = "Store not configured"

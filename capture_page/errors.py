# capture_page/errors.py
"""
Exception hierarchy for the capture client.

Every failure raised by the library derives from :class:`CaptureError`, so callers
can catch one base class or branch on the concrete kind: a configuration bug
(:class:`MissingCredentials`, :class:`InvalidUrl`, :class:`InvalidOption`) versus a
transport or service problem (:class:`HttpError`, :class:`ParseError`).
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "CaptureError",
    "MissingCredentials",
    "InvalidUrl",
    "MissingUrl",
    "InvalidOption",
    "UnknownRequestType",
    "HttpError",
    "ParseError",
)


class CaptureError(Exception):
    """Base class for all capture client errors."""


class MissingCredentials(CaptureError):
    """API key or secret is empty."""

    def __init__(self, message: str = "Key and Secret are required") -> None:
        super().__init__(message)


class InvalidUrl(CaptureError, ValueError):
    """Target URL is not a syntactically valid absolute URL."""

    def __init__(self, url: object, reason: str = "URL should be an absolute http(s) URL") -> None:
        self.url = url
        super().__init__(f"{reason}: {url!r}")


class MissingUrl(InvalidUrl):
    """Target URL is empty."""

    def __init__(self) -> None:
        super().__init__("", "URL is required")


class InvalidOption(CaptureError, TypeError):
    """Capture option value is not a boolean, number or string."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"Option {name!r} must be a boolean, number or string, got {type(value).__name__}"
        )


class UnknownRequestType(CaptureError, ValueError):
    """Endpoint name is not one of image, pdf, content, metadata, animated."""

    def __init__(self, request_type: object) -> None:
        self.request_type = request_type
        super().__init__(f"Unknown request type: {request_type!r}")


class HttpError(CaptureError):
    """Non-2xx response or transport failure.

    ``status`` is ``None`` when no response was received at all
    (DNS failure, refused connection, timeout).
    """

    def __init__(self, status: Optional[int], message: str) -> None:
        self.status = status
        self.message = message
        prefix = f"HTTP {status}" if status is not None else "HTTP request failed"
        super().__init__(f"{prefix}: {message}")


class ParseError(CaptureError):
    """Response body could not be deserialized into the expected result model."""

# capture_page/signer.py
"""
Signed request URLs for the capture service.

A request URL has the shape::

    {host}/{key}/{token}/{request_type}?{query}

where ``query`` is the canonical option encoding (see :mod:`capture_page.options`)
including the target ``url``, and ``token`` is the lower-case hex MD5 digest of
``secret + query``.  The service recomputes the digest from the query string it
receives, so the secret itself never leaves the client.

Building a URL is a pure function of its inputs and performs no I/O.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Final, Mapping, Optional
from urllib.parse import quote, urlparse

from capture_page.errors import InvalidUrl, MissingCredentials, MissingUrl, UnknownRequestType
from capture_page.logger import logger
from capture_page.options import to_query_string

__all__ = (
    "API_URL",
    "EDGE_URL",
    "RequestType",
    "SignedRequest",
    "generate_token",
    "validate_url",
    "build_request",
    "build_url",
)

API_URL: Final[str] = "https://cdn.capture.page"
EDGE_URL: Final[str] = "https://edge.capture.page"


class RequestType(str, Enum):
    """Capture endpoints; the value is the URL path segment."""

    IMAGE = "image"
    PDF = "pdf"
    CONTENT = "content"
    METADATA = "metadata"
    ANIMATED = "animated"

    def __str__(self) -> str:
        return self.value


# Only the pdf endpoint understands "format" (page size); image output format is "type".
_EXCLUDED_KEYS: Final[Dict[RequestType, tuple[str, ...]]] = {
    RequestType.IMAGE: ("format",),
    RequestType.CONTENT: ("format",),
    RequestType.METADATA: ("format",),
    RequestType.ANIMATED: ("format",),
    RequestType.PDF: (),
}


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A fully qualified, signed request URL for one endpoint."""

    request_type: RequestType
    url: str


def generate_token(secret: str, query: str) -> str:
    return hashlib.md5(f"{secret}{query}".encode("utf-8")).hexdigest()


def validate_url(url: Any) -> str:
    """Shallow syntactic check: non-empty string with a scheme and a host.

    Returns the URL with surrounding whitespace removed; that is the value signed.
    """
    if url is None:
        raise MissingUrl()
    if not isinstance(url, str):
        raise InvalidUrl(url, "URL should be a string")
    url = url.strip()
    if not url:
        raise MissingUrl()
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrl(url)
    return url


def build_request(
    request_type: RequestType | str,
    url: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    key: str,
    secret: str,
    use_edge: bool = False,
    api_url: str = API_URL,
    edge_url: str = EDGE_URL,
) -> SignedRequest:
    """Validate inputs and build a :class:`SignedRequest`.

    Raises
    ------
    MissingCredentials
        *key* or *secret* is empty.
    InvalidUrl
        *url* is empty (:class:`MissingUrl`) or not an absolute URL.
    InvalidOption
        An option value is not a boolean, number or string.
    UnknownRequestType
        *request_type* is not one of the capture endpoints.
    """
    if not key or not secret:
        raise MissingCredentials()
    url = validate_url(url)
    try:
        request_type = RequestType(request_type)
    except ValueError:
        raise UnknownRequestType(request_type) from None

    params: Dict[str, Any] = dict(options or {})
    params["url"] = url

    query = to_query_string(params, exclude=_EXCLUDED_KEYS[request_type])
    token = generate_token(secret, query)
    base_url = (edge_url if use_edge else api_url).rstrip("/")

    logger.debug("Signed %s request for %s (edge=%s)", request_type, url, use_edge)
    return SignedRequest(request_type, f"{base_url}/{quote(key, safe='')}/{token}/{request_type.value}?{query}")


def build_url(
    request_type: RequestType | str,
    url: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    key: str,
    secret: str,
    use_edge: bool = False,
    api_url: str = API_URL,
    edge_url: str = EDGE_URL,
) -> str:
    """Same as :func:`build_request` but return only the URL string."""
    return build_request(
        request_type,
        url,
        options,
        key=key,
        secret=secret,
        use_edge=use_edge,
        api_url=api_url,
        edge_url=edge_url,
    ).url

# capture_page/options.py
"""
Capture options: canonical query-string encoding and structured option models.

Options are a flat mapping from the service's option name to a scalar value
(``bool``, ``int``, ``float`` or ``str``).  Encoding is canonical: keys are sorted,
so two equal mappings always produce the same bytes and therefore the same
request token.

Encoding rules
--------------
* ``True`` / ``False`` → ``true`` / ``false``.
* integers → decimal text; floats with an integral value are written as
  integers (``3.0`` → ``3``), other floats use :func:`repr`.
* strings → as is.
* keys and values are percent-encoded, everything outside ``A-Za-z0-9-_.~``
  is escaped (a space becomes ``%20``).
* ``None`` and ``""`` mean "unset" and are skipped.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from capture_page.errors import InvalidOption

__all__ = (
    "CaptureValue",
    "RequestOptions",
    "encode_value",
    "to_query_string",
    "as_request_options",
    "BaseOptions",
    "ScreenshotOptions",
    "PdfOptions",
    "ContentOptions",
    "MetadataOptions",
)

CaptureValue = Union[bool, int, float, str]
RequestOptions = Mapping[str, CaptureValue]


# --------------------------------------------------------------------------- #
# Encoder                                                                     #
# --------------------------------------------------------------------------- #


def _quote(text: str) -> str:
    return quote(text, safe="")


def encode_value(name: str, value: Any) -> Optional[str]:
    """Render a single option value as text, or ``None`` if the option is unset."""
    if value is None:
        return None
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidOption(name, value)
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value or None
    raise InvalidOption(name, value)


def to_query_string(options: Optional[Mapping[str, Any]], exclude: Iterable[str] = ()) -> str:
    """Encode *options* into a canonical ``k=v&k=v`` fragment (sorted by key).

    Keys listed in *exclude* are dropped.  An empty or absent mapping yields ``""``.
    """
    if not options:
        return ""
    skip = set(exclude)
    params = []
    for key in sorted(options):
        if key in skip:
            continue
        text = encode_value(key, options[key])
        if text is None:
            continue
        params.append(f"{_quote(key)}={_quote(text)}")
    return "&".join(params)


# --------------------------------------------------------------------------- #
# Structured options                                                          #
# --------------------------------------------------------------------------- #


class BaseOptions(BaseModel):
    """Typed options for one endpoint.

    Fields use snake_case in Python and the service's camelCase names on the wire.
    ``additional_options`` carries options not modelled here; they override
    modelled fields with the same wire name.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    additional_options: Optional[Dict[str, CaptureValue]] = Field(default=None, exclude=True)

    def to_request_options(self) -> Dict[str, CaptureValue]:
        options: Dict[str, CaptureValue] = self.model_dump(by_alias=True, exclude_none=True)
        if self.additional_options:
            options.update(self.additional_options)
        return options


class ScreenshotOptions(BaseOptions):
    """Options for the ``image`` and ``animated`` endpoints."""

    # Viewport
    vw: Optional[int] = Field(default=None, ge=0)
    vh: Optional[int] = Field(default=None, ge=0)
    scale_factor: Optional[float] = Field(default=None, gt=0)

    # Capture
    full: Optional[bool] = None
    delay: Optional[int] = Field(default=None, ge=0)
    wait_for: Optional[str] = None
    wait_for_id: Optional[str] = None

    # Visual
    dark_mode: Optional[bool] = None
    transparent: Optional[bool] = None
    selector: Optional[str] = None
    selector_id: Optional[str] = None

    # Blocking / detection
    block_cookie_banners: Optional[bool] = None
    block_ads: Optional[bool] = None
    bypass_bot_detection: Optional[bool] = None

    # Output image
    image_type: Optional[str] = Field(default=None, alias="type")
    best_format: Optional[bool] = None
    resize_width: Optional[int] = Field(default=None, ge=0)
    resize_height: Optional[int] = Field(default=None, ge=0)

    http_auth: Optional[str] = None
    user_agent: Optional[str] = None
    fresh: Optional[bool] = None


class PdfOptions(BaseOptions):
    """Options for the ``pdf`` endpoint."""

    http_auth: Optional[str] = None
    user_agent: Optional[str] = None

    # Page size, CSS units ("210mm") or a named format ("A4")
    width: Optional[str] = None
    height: Optional[str] = None
    format: Optional[str] = None

    margin_top: Optional[str] = None
    margin_right: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None

    scale: Optional[float] = Field(default=None, gt=0)
    landscape: Optional[bool] = None
    delay: Optional[int] = Field(default=None, ge=0)

    file_name: Optional[str] = None
    s3_acl: Optional[str] = None
    s3_redirect: Optional[bool] = None
    timestamp: Optional[bool] = None


class ContentOptions(BaseOptions):
    """Options for the ``content`` endpoint."""

    http_auth: Optional[str] = None
    user_agent: Optional[str] = None
    delay: Optional[int] = Field(default=None, ge=0)
    wait_for: Optional[str] = None
    wait_for_id: Optional[str] = None


class MetadataOptions(BaseOptions):
    """Options for the ``metadata`` endpoint (only ``additional_options`` for now)."""


def as_request_options(options: Union[RequestOptions, BaseOptions, None]) -> Dict[str, Any]:
    """Normalize a mapping or a structured options model into a plain dict."""
    if options is None:
        return {}
    if isinstance(options, BaseOptions):
        return options.to_request_options()
    return dict(options)

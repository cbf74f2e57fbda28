# capture_page/__init__.py
"""
capture_page package initializer.
Defines package version and exposes the client, options and errors.
"""
__version__ = "0.1.0"

from capture_page.client import Capture
from capture_page.config import CaptureConfig, config_from_env, load_config
from capture_page.errors import (
    CaptureError,
    HttpError,
    InvalidOption,
    InvalidUrl,
    MissingCredentials,
    MissingUrl,
    ParseError,
    UnknownRequestType,
)
from capture_page.models import ContentResult, MetadataResult
from capture_page.options import (
    ContentOptions,
    MetadataOptions,
    PdfOptions,
    ScreenshotOptions,
)
from capture_page.signer import RequestType, SignedRequest

__all__ = [
    "__version__",
    "Capture",
    "CaptureConfig",
    "config_from_env",
    "load_config",
    "CaptureError",
    "HttpError",
    "InvalidOption",
    "InvalidUrl",
    "MissingCredentials",
    "MissingUrl",
    "ParseError",
    "UnknownRequestType",
    "ContentResult",
    "MetadataResult",
    "ContentOptions",
    "MetadataOptions",
    "PdfOptions",
    "ScreenshotOptions",
    "RequestType",
    "SignedRequest",
]

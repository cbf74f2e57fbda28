# capture_page/models.py
"""
Result models for the JSON endpoints.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class _Result(BaseModel):
    # unknown response fields are kept as extras
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    success: bool


class ContentResult(_Result):
    """Page content returned by the ``content`` endpoint.

    ``success`` is required; a response without it is rejected.  The text
    fields default to ``""`` because the service omits them on failure.
    """

    html: str = ""
    text_content: str = Field(default="", alias="textContent")
    markdown: str = ""


class MetadataResult(_Result):
    """Page metadata returned by the ``metadata`` endpoint."""

    metadata: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["ContentResult", "MetadataResult"]

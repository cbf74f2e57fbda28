# capture_page/fetcher.py
"""
Fetcher module: issues a single GET against a signed capture URL.
The URL is sent exactly as signed (``encoded=True``); requoting would change
the query string the token was computed over.

No retries, no caching; the caller owns retry policy.  Transport failures and
non-2xx responses both surface as :class:`~capture_page.errors.HttpError`.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Type, TypeVar

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout
from pydantic import BaseModel, ValidationError
from yarl import URL

from capture_page.errors import HttpError, ParseError
from capture_page.logger import logger

__all__ = ("Fetcher",)

ModelT = TypeVar("ModelT", bound=BaseModel)

#: max characters of an error body kept in HttpError.message
_ERROR_BODY_LIMIT = 200


async def _raise_for_status(resp: ClientResponse) -> None:
    if 200 <= resp.status < 300:
        return
    body = (await resp.text(errors="replace")).strip()
    message = body[:_ERROR_BODY_LIMIT] if body else (resp.reason or "")
    logger.warning("Capture service answered HTTP %d", resp.status)
    raise HttpError(resp.status, message)


class Fetcher:
    """Thin wrapper over an :class:`aiohttp.ClientSession` for capture requests."""

    def __init__(self, session: ClientSession, timeout: Optional[ClientTimeout] = None) -> None:
        self.session = session
        self.timeout = timeout

    def _get(self, url: str):
        kwargs = {"raise_for_status": False}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return self.session.get(URL(url, encoded=True), **kwargs)

    async def fetch_bytes(self, url: str) -> bytes:
        """GET *url* and return the raw body (image, PDF, GIF)."""
        try:
            async with self._get(url) as resp:
                await _raise_for_status(resp)
                data = await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Capture request failed: %s", type(exc).__name__)
            raise HttpError(None, str(exc) or type(exc).__name__) from exc
        logger.debug("Received %d bytes", len(data))
        return data

    async def fetch_json(self, url: str, model: Type[ModelT]) -> ModelT:
        """GET *url* and validate the JSON body into *model*.

        Raises :class:`ParseError` when the body is not JSON or does not match *model*.
        """
        try:
            async with self._get(url) as resp:
                await _raise_for_status(resp)
                body = await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Capture request failed: %s", type(exc).__name__)
            raise HttpError(None, str(exc) or type(exc).__name__) from exc

        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise ParseError(f"Invalid {model.__name__} response: {exc}") from exc

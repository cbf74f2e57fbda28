# capture_page/client.py
"""
Client facade for the capture service.

Usage::

    from capture_page import Capture

    capture = Capture("key", "secret")
    url = capture.build_image_url("https://example.com", {"full": True, "delay": 3})

    async with Capture.from_env().open() as capture:
        png = await capture.fetch_image("https://example.com")
        meta = await capture.fetch_metadata("https://example.com")

Build methods are pure.  Fetch methods issue exactly one GET each.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Type, TypeVar, Union

from aiohttp import ClientSession, ClientTimeout
from pydantic import BaseModel

from capture_page.config import CaptureConfig, config_from_env
from capture_page.fetcher import Fetcher
from capture_page.logger import logger
from capture_page.models import ContentResult, MetadataResult
from capture_page.options import (
    BaseOptions,
    ContentOptions,
    MetadataOptions,
    PdfOptions,
    RequestOptions,
    ScreenshotOptions,
    as_request_options,
)
from capture_page.signer import RequestType, SignedRequest, build_request

__all__ = ("Capture",)

ModelT = TypeVar("ModelT", bound=BaseModel)

OptionsArg = Union[RequestOptions, BaseOptions, None]


class Capture:
    """Signs and fetches capture requests with one credential pair.

    Configuration is fixed at construction; ``with_*`` methods return new
    instances.  A caller-supplied ``session`` is used as is and never closed.
    Inside ``async with capture.open() as c`` one session is shared by all
    fetches made through ``c``; otherwise every fetch opens and closes its own
    session.
    """

    def __init__(
        self,
        key: str = "",
        secret: str = "",
        *,
        use_edge: bool = False,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None,
        config: Optional[CaptureConfig] = None,
    ) -> None:
        self.config = config or CaptureConfig(
            key=key, secret=secret, use_edge=use_edge, timeout=timeout
        )
        self._session = session

    # ------------------------------------------------------------------ #
    # Construction helpers                                                #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_config(cls, config: CaptureConfig, session: Optional[ClientSession] = None) -> Capture:
        return cls(config=config, session=session)

    @classmethod
    def from_env(cls, session: Optional[ClientSession] = None, **overrides: Any) -> Capture:
        """Credentials from ``CAPTURE_KEY`` / ``CAPTURE_SECRET``."""
        return cls(config=config_from_env(**overrides), session=session)

    def with_edge(self, use_edge: bool = True) -> Capture:
        return Capture(config=self.config.model_copy(update={"use_edge": use_edge}), session=self._session)

    def with_timeout(self, timeout: Optional[float]) -> Capture:
        return Capture(config=self.config.model_copy(update={"timeout": timeout}), session=self._session)

    def with_session(self, session: ClientSession) -> Capture:
        return Capture(config=self.config, session=session)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(use_edge={self.config.use_edge}, timeout={self.config.timeout})"

    # ------------------------------------------------------------------ #
    # Session lifecycle                                                   #
    # ------------------------------------------------------------------ #

    def _timeout(self) -> Optional[ClientTimeout]:
        return ClientTimeout(total=self.config.timeout) if self.config.timeout else None

    def _new_session(self) -> ClientSession:
        return ClientSession(headers={"User-Agent": self.config.user_agent})

    @asynccontextmanager
    async def open(self) -> AsyncIterator[Capture]:
        """Yield a copy of this client bound to one new session, closed on exit.

        ``self`` is left untouched, so concurrent ``open()`` blocks on a shared
        client each get their own session.
        """
        async with self._new_session() as session:
            yield self.with_session(session)

    @asynccontextmanager
    async def _fetcher(self) -> AsyncIterator[Fetcher]:
        if self._session is not None:
            yield Fetcher(self._session, self._timeout())
            return
        async with self._new_session() as session:
            yield Fetcher(session, self._timeout())

    # ------------------------------------------------------------------ #
    # URL building                                                        #
    # ------------------------------------------------------------------ #

    def build_request(
        self, request_type: Union[RequestType, str], url: str, options: OptionsArg = None
    ) -> SignedRequest:
        return build_request(
            request_type,
            url,
            as_request_options(options),
            key=self.config.key.get_secret_value(),
            secret=self.config.secret.get_secret_value(),
            use_edge=self.config.use_edge,
            api_url=self.config.api_url,
            edge_url=self.config.edge_url,
        )

    def build_image_url(
        self, url: str, options: Union[RequestOptions, ScreenshotOptions, None] = None
    ) -> str:
        return self.build_request(RequestType.IMAGE, url, options).url

    def build_pdf_url(self, url: str, options: Union[RequestOptions, PdfOptions, None] = None) -> str:
        return self.build_request(RequestType.PDF, url, options).url

    def build_content_url(
        self, url: str, options: Union[RequestOptions, ContentOptions, None] = None
    ) -> str:
        return self.build_request(RequestType.CONTENT, url, options).url

    def build_metadata_url(
        self, url: str, options: Union[RequestOptions, MetadataOptions, None] = None
    ) -> str:
        return self.build_request(RequestType.METADATA, url, options).url

    def build_animated_url(
        self, url: str, options: Union[RequestOptions, ScreenshotOptions, None] = None
    ) -> str:
        return self.build_request(RequestType.ANIMATED, url, options).url

    # ------------------------------------------------------------------ #
    # Fetching                                                            #
    # ------------------------------------------------------------------ #

    async def _fetch_bytes(self, request_type: RequestType, url: str, options: OptionsArg) -> bytes:
        signed = self.build_request(request_type, url, options)
        logger.info("Fetching %s for %s", request_type, url)
        async with self._fetcher() as fetcher:
            return await fetcher.fetch_bytes(signed.url)

    async def _fetch_model(
        self, request_type: RequestType, url: str, options: OptionsArg, model: Type[ModelT]
    ) -> ModelT:
        signed = self.build_request(request_type, url, options)
        logger.info("Fetching %s for %s", request_type, url)
        async with self._fetcher() as fetcher:
            return await fetcher.fetch_json(signed.url, model)

    async def fetch_image(
        self, url: str, options: Union[RequestOptions, ScreenshotOptions, None] = None
    ) -> bytes:
        return await self._fetch_bytes(RequestType.IMAGE, url, options)

    async def fetch_pdf(self, url: str, options: Union[RequestOptions, PdfOptions, None] = None) -> bytes:
        return await self._fetch_bytes(RequestType.PDF, url, options)

    async def fetch_animated(
        self, url: str, options: Union[RequestOptions, ScreenshotOptions, None] = None
    ) -> bytes:
        return await self._fetch_bytes(RequestType.ANIMATED, url, options)

    async def fetch_content(
        self, url: str, options: Union[RequestOptions, ContentOptions, None] = None
    ) -> ContentResult:
        return await self._fetch_model(RequestType.CONTENT, url, options, ContentResult)

    async def fetch_metadata(
        self, url: str, options: Union[RequestOptions, MetadataOptions, None] = None
    ) -> MetadataResult:
        return await self._fetch_model(RequestType.METADATA, url, options, MetadataResult)

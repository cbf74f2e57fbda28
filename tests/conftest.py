# File: tests/conftest.py
from __future__ import annotations

import asyncio
import hashlib
import socket
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from capture_page import Capture, CaptureConfig

TEST_KEY = "test_key"
TEST_SECRET = "test_secret"

#: kind -> (status, body, content type)
Responses = Dict[str, Tuple[int, bytes, str]]

DEFAULT_RESPONSES: Responses = {
    "image": (200, b"\x89PNG\r\n\x1a\nfake-png", "image/png"),
    "pdf": (200, b"%PDF-1.7 fake", "application/pdf"),
    "animated": (200, b"GIF89a fake", "image/gif"),
    "content": (
        200,
        b'{"success": true, "html": "<p>Hi</p>", "textContent": "Hi", "markdown": "Hi", "took": 12}',
        "application/json",
    ),
    "metadata": (
        200,
        b'{"success": true, "metadata": {"title": "Example Domain", "icons": ["/favicon.ico"]}}',
        "application/json",
    ),
}


@dataclass
class FakeCaptureService:
    """Handle on the in-process capture server used by the tests."""

    base_url: str
    responses: Responses
    requests: List[str] = field(default_factory=list)
    user_agents: List[str] = field(default_factory=list)
    #: seconds the server waits before answering
    delay: float = 0.0


@pytest.fixture()
def capture() -> Capture:
    """Client with fixed test credentials against the real (never contacted) hosts."""
    return Capture(TEST_KEY, TEST_SECRET)


async def _serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def capture_service() -> AsyncIterator[FakeCaptureService]:
    """Capture server that checks the request token like the real service does."""
    app = web.Application()
    state = FakeCaptureService(base_url="", responses=dict(DEFAULT_RESPONSES))

    async def handle(request: web.Request) -> web.Response:
        state.requests.append(str(request.rel_url))
        state.user_agents.append(request.headers.get("User-Agent", ""))
        if request.match_info["key"] != TEST_KEY:
            return web.Response(status=401, text="unknown key")
        query = request.rel_url.raw_query_string
        expected = hashlib.md5(f"{TEST_SECRET}{query}".encode("utf-8")).hexdigest()
        if request.match_info["token"] != expected:
            return web.Response(status=403, text="invalid token")
        if state.delay:
            await asyncio.sleep(state.delay)
        status, body, content_type = state.responses[request.match_info["kind"]]
        return web.Response(status=status, body=body, content_type=content_type)

    app.router.add_get("/{key}/{token}/{kind}", handle)

    async for url in _serve_app(app):
        state.base_url = url
        yield state


@pytest.fixture()
def unused_port_url() -> str:
    """URL of a local port nothing listens on."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture()
def service_client(capture_service: FakeCaptureService) -> Capture:
    """Client whose standard and edge hosts both point at the fake service."""
    config = CaptureConfig(
        key=TEST_KEY,
        secret=TEST_SECRET,
        api_url=capture_service.base_url,
        edge_url=capture_service.base_url,
        timeout=5.0,
    )
    return Capture.from_config(config)

import json
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.backend.app.main import app
from src.backend.app.core.config import get_settings
from src.backend.app.core.http import HTTP_CLIENT_STATE_KEY, OutboundClient
from src.backend.app.services.providers import ProviderChain

GOOGLE_HOST = "translate.googleapis.com"
LIBRE_HOST = "translate.argosopentech.com"

_ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
    "GOOGLE_TRANSLATE_URL",
    "LIBRETRANSLATE_URL",
    "LIBRETRANSLATE_API_KEY",
    "TRANSLATE_PROXY_URL",
    "TRANSLATE_USER_AGENT",
    "TRANSLATE_MAX_CHUNK_SIZE",
    "TRANSLATE_MIN_LENGTH",
    "PROXY_ALLOWED_ORIGINS",
)


def google_payload(*fragments):
    return [[[fragment, "source", None, None, 3] for fragment in fragments], None, "en"]


def google_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=google_payload(f"TR: {request.url.params['q']}"))


def libre_ok(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"translatedText": f"LT: {body['q']}"})


def server_error(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"error": "down"})


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class FakeProviders:
    """Scripted Google and LibreTranslate backends behind httpx.MockTransport."""

    def __init__(self):
        self.google = google_ok
        self.libre = libre_ok
        self.requests: list[httpx.Request] = []
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GOOGLE_HOST:
            return self.google(request)
        if request.url.host == LIBRE_HOST:
            return self.libre(request)
        return httpx.Response(404)

    @property
    def hosts(self):
        return [r.url.host for r in self.requests]

    def chain(self) -> ProviderChain:
        return ProviderChain.from_settings(OutboundClient(self.client), get_settings())


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def fake_providers():
    fake = FakeProviders()
    try:
        yield fake
    finally:
        await fake.client.aclose()


@pytest_asyncio.fixture
async def api_client(fake_providers):
    app.state.__setattr__(HTTP_CLIENT_STATE_KEY, fake_providers.client)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        if hasattr(app.state, HTTP_CLIENT_STATE_KEY):
            delattr(app.state, HTTP_CLIENT_STATE_KEY)

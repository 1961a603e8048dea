from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx
from fastapi import Request

from .config import get_settings

logger = logging.getLogger(__name__)

HTTP_CLIENT_STATE_KEY = "http_client"


class OutboundClient:
    """Sends provider requests straight to the provider host.

    Without a shared ``httpx.AsyncClient`` every request opens its own
    short-lived client, which is what scripts and one-off calls get.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, url, params=params, headers=headers, json=json)
        async with httpx.AsyncClient() as client:
            return await client.request(method, url, params=params, headers=headers, json=json)


class ProxyOutboundClient(OutboundClient):
    """Relays provider requests through a proxy endpoint.

    The proxy receives an envelope ``{protocol, origin, path, method, headers,
    body}`` and answers with the upstream status and body.
    """

    def __init__(self, proxy_url: str, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(client)
        self.proxy_url = proxy_url

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
    ) -> httpx.Response:
        envelope = build_proxy_envelope(method, url, params=params, headers=headers, body=json)
        return await super().request(
            "POST",
            self.proxy_url,
            headers={"Content-Type": "application/json"},
            json=envelope,
        )


def build_proxy_envelope(
    method: str,
    url: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    body: Any = None,
) -> dict[str, Any]:
    target = httpx.URL(url, params=params) if params else httpx.URL(url)
    path = target.raw_path.decode("ascii")
    envelope: dict[str, Any] = {
        "protocol": target.scheme,
        "origin": target.host,
        "path": path,
        "method": method.upper(),
        "headers": dict(headers or {}),
    }
    if body is not None:
        envelope["body"] = body
    return envelope


async def init_http_client(app) -> None:
    client = httpx.AsyncClient()
    app.state.__setattr__(HTTP_CLIENT_STATE_KEY, client)


async def close_http_client(app) -> None:
    client: Optional[httpx.AsyncClient] = getattr(app.state, HTTP_CLIENT_STATE_KEY, None)
    if client is not None:
        try:
            await client.aclose()
        finally:
            delattr(app.state, HTTP_CLIENT_STATE_KEY)


def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    return getattr(request.app.state, HTTP_CLIENT_STATE_KEY, None)


def get_outbound_client(request: Request) -> OutboundClient:
    settings = get_settings()
    client = get_http_client(request)
    if settings.translate_proxy_url:
        logger.debug("Routing provider calls through %s", settings.translate_proxy_url)
        return ProxyOutboundClient(settings.translate_proxy_url, client)
    return OutboundClient(client)

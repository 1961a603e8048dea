from __future__ import annotations

from fastapi import Request

from .config import get_settings
from .http import get_outbound_client
from ..services.providers import ProviderChain


def get_provider_chain(request: Request) -> ProviderChain:
    return ProviderChain.from_settings(get_outbound_client(request), get_settings())

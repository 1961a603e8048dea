"""
Translation providers and the fallback chain around them.

Provider order:
1. Google web translate (translate.googleapis.com, client=gtx) - PRIMARY
2. LibreTranslate-compatible endpoint - SECONDARY

A provider result is only accepted when it is long enough and is not an
echo of the source text. Callers decide what to do when the whole chain
fails; the top-level translate functions pass the cleaned text through.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..core.config import Settings, get_settings
from ..core.errors import EmptyResultError, NoTranslationError, ProviderError
from ..core.http import OutboundClient
from .language_utils import source_language_for

logger = logging.getLogger(__name__)

DEFAULT_MIN_LENGTH = 10


@dataclass(frozen=True)
class ProviderResult:
    text: str
    provider: str


class TranslationProvider:
    name = "provider"

    def __init__(self, outbound: OutboundClient) -> None:
        self.outbound = outbound

    async def translate(self, text: str, source: str, target: str) -> str:
        raise NotImplementedError


class GoogleWebProvider(TranslationProvider):
    name = "google"

    def __init__(self, outbound: OutboundClient, url: str, user_agent: str = "Mozilla/5.0") -> None:
        super().__init__(outbound)
        self.url = url
        self.user_agent = user_agent

    async def translate(self, text: str, source: str, target: str) -> str:
        params = {
            "client": "gtx",
            "sl": source,
            "tl": target,
            "dt": "t",
            "q": text,
        }
        response = await self.outbound.request(
            "GET",
            self.url,
            params=params,
            headers={"User-Agent": self.user_agent},
        )
        if not response.is_success:
            raise ProviderError(self.name, f"Google Translate API error: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(self.name, "Invalid Google Translate response") from exc

        # Shape: [[["translated", "original", null, null, 3], ...], null, "en", ...]
        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise ProviderError(self.name, "Invalid Google Translate response")

        fragments = [
            item[0]
            for item in data[0]
            if isinstance(item, list) and item and isinstance(item[0], str) and item[0]
        ]
        translation = "".join(fragments)
        if not translation.strip():
            raise EmptyResultError(self.name, "Empty translation result")
        return translation


class LibreTranslateProvider(TranslationProvider):
    name = "libretranslate"

    def __init__(self, outbound: OutboundClient, url: str, api_key: str = "") -> None:
        super().__init__(outbound)
        self.url = url
        self.api_key = api_key

    async def translate(self, text: str, source: str, target: str) -> str:
        body: dict[str, Any] = {
            "q": text,
            "source": source,
            "target": target,
            "format": "text",
        }
        if self.api_key:
            body["api_key"] = self.api_key
        response = await self.outbound.request(
            "POST",
            self.url,
            headers={"Content-Type": "application/json"},
            json=body,
        )
        if not response.is_success:
            raise ProviderError(self.name, f"LibreTranslate API error: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(self.name, "Invalid LibreTranslate response") from exc

        translation = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translation, str) or not translation.strip():
            raise EmptyResultError(self.name, "Empty translation result")
        return translation


def is_acceptable(candidate: str | None, source_text: str, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """Reject blank, trivially short, or echoed translations."""
    if not candidate:
        return False
    if len(candidate) <= min_length:
        return False
    return candidate.lower() != source_text.lower()


class ProviderChain:
    def __init__(self, providers: Sequence[TranslationProvider], min_length: int = DEFAULT_MIN_LENGTH) -> None:
        self.providers = list(providers)
        self.min_length = min_length

    @classmethod
    def from_settings(cls, outbound: OutboundClient, settings: Settings | None = None) -> "ProviderChain":
        settings = settings or get_settings()
        providers = [
            GoogleWebProvider(outbound, settings.google_translate_url, settings.translate_user_agent),
            LibreTranslateProvider(outbound, settings.libretranslate_url, settings.libretranslate_api_key),
        ]
        return cls(providers, min_length=settings.min_translation_length)

    async def translate(self, text: str, target: str, source: str | None = None) -> ProviderResult:
        source = source or source_language_for(target)
        for provider in self.providers:
            try:
                candidate = await provider.translate(text, source, target)
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("%s failed, trying next provider: %s", provider.name, exc)
                continue
            if is_acceptable(candidate, text, self.min_length):
                logger.info("Using %s translation", provider.name)
                return ProviderResult(text=candidate, provider=provider.name)
            logger.warning("%s returned an unusable translation, trying next provider", provider.name)
        raise NoTranslationError("All translation services failed")

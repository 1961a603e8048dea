from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.config import get_settings
from ..core.errors import NoTranslationError
from ..core.http import OutboundClient, ProxyOutboundClient
from ..schemas.translation import TranslationResult
from .chunker import split_text_into_chunks
from .language_utils import language_label, normalize_code, SUPPORTED_LANG_CODES
from .providers import ProviderChain
from .sanitizer import sanitize
from .sentiment import classify_sentiment

logger = logging.getLogger(__name__)

PASSTHROUGH = "passthrough"
MIN_SUMMARY_LENGTH = 8


@dataclass
class TranslationOutcome:
    translation: str
    providers: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when text was sent for translation and no provider was accepted."""
        return bool(self.providers) and all(p == PASSTHROUGH for p in self.providers)


def default_chain() -> ProviderChain:
    settings = get_settings()
    if settings.translate_proxy_url:
        outbound: OutboundClient = ProxyOutboundClient(settings.translate_proxy_url)
    else:
        outbound = OutboundClient()
    return ProviderChain.from_settings(outbound, settings)


def _preview(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


async def translate_detailed(
    text: str,
    target_lang: str = "tr",
    chain: Optional[ProviderChain] = None,
    max_chunk_size: Optional[int] = None,
) -> TranslationOutcome:
    """Run the full pipeline and report which provider handled each chunk.

    Blank input, and input that sanitizes down to nothing, is returned as
    given with no providers recorded. Chunks no provider could translate
    are passed through in their cleaned form.
    """
    if not text or not text.strip():
        return TranslationOutcome(text or "")

    clean_text = sanitize(text)
    if not clean_text:
        return TranslationOutcome(text)

    chain = chain or default_chain()
    max_chunk_size = max_chunk_size or get_settings().max_chunk_size

    chunks = split_text_into_chunks(clean_text, max_chunk_size)
    if len(chunks) > 1:
        logger.info("Long text detected (%d chars), splitting into %d chunks", len(clean_text), len(chunks))

    translated: List[str] = []
    used: List[str] = []
    for chunk in chunks:
        logger.info('Translating to %s: "%s"', language_label(target_lang), _preview(chunk))
        try:
            result = await chain.translate(chunk, target_lang)
        except NoTranslationError:
            logger.warning("All translation services failed, returning original")
            translated.append(chunk)
            used.append(PASSTHROUGH)
            continue
        translated.append(result.text)
        used.append(result.provider)

    return TranslationOutcome(" ".join(translated), used)


async def translate_to_turkish(text: str, chain: Optional[ProviderChain] = None) -> str:
    """Translate English text to Turkish, falling back to the cleaned original."""
    try:
        outcome = await translate_detailed(text, "tr", chain)
        return outcome.translation
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Translation error", exc_info=exc)
        return sanitize(text)


async def translate_text(text: str, target_lang: str, chain: Optional[ProviderChain] = None) -> str:
    lang = normalize_code(target_lang)
    if lang not in SUPPORTED_LANG_CODES:
        raise ValueError(f"Unsupported target language: {target_lang}")
    if lang == "en":
        # Sources are English already; only the markup needs to go
        return sanitize(text)
    return await translate_to_turkish(text, chain)


async def translate_batch(texts: Sequence[str], chain: Optional[ProviderChain] = None) -> List[str]:
    try:
        chain = chain or default_chain()
        translations = await asyncio.gather(*(translate_to_turkish(text, chain) for text in texts))
        return list(translations)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Batch translation error", exc_info=exc)
        return list(texts)


async def summarize_and_translate(
    title: str,
    text: Optional[str] = None,
    chain: Optional[ProviderChain] = None,
) -> TranslationResult:
    """Translate the headline to Turkish and tag its sentiment.

    No summarization happens: the translated title is the summary, unless it
    came back too short to be useful.
    """
    try:
        translated_title = await translate_to_turkish(title, chain)
        sentiment = classify_sentiment(title, text)
        summary = translated_title if translated_title and len(translated_title) > MIN_SUMMARY_LENGTH else title
        return TranslationResult(summary=summary, sentiment=sentiment)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Translation error", exc_info=exc)
        return TranslationResult(summary=title, sentiment="neutral")


async def summarize_in_english(title: str, text: Optional[str] = None) -> TranslationResult:
    try:
        return TranslationResult(summary=title, sentiment=classify_sentiment(title, text))
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Summarization error", exc_info=exc)
        return TranslationResult(summary=title, sentiment="neutral")

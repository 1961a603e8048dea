import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from ..core.config import get_settings
from ..core.deps import get_provider_chain
from ..core.errors import standard_error
from ..core.http import OutboundClient, get_http_client
from ..schemas.translation import (
    BatchTranslationRequest,
    BatchTranslationResponse,
    ProxyRequest,
    SummarizeRequest,
    TranslateTextResponse,
    TranslationRequest,
    TranslationResult,
)
from ..services.providers import ProviderChain
from ..services.sanitizer import sanitize, strip_markup
from ..services.translation_service import (
    summarize_and_translate,
    summarize_in_english,
    translate_batch,
    translate_detailed,
)

logger = logging.getLogger(__name__)

translate_route = APIRouter(prefix='/api', tags=['translate'])

# Never relayed upstream; httpx sets its own
_HOP_BY_HOP_HEADERS = {'host', 'content-length', 'connection', 'transfer-encoding'}


def _translation_failed(best_effort: str) -> JSONResponse:
    payload = standard_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        'translation_failed',
        'Translation failed',
    )
    payload['translation'] = best_effort
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


@translate_route.post('/translate', response_model=TranslateTextResponse)
async def translate(
    request: TranslationRequest,
    chain: ProviderChain = Depends(get_provider_chain),
):
    clean_text = sanitize(request.text)
    if not clean_text:
        return TranslateTextResponse(translation=request.text)
    if request.target_lang == 'en':
        return TranslateTextResponse(translation=clean_text)

    try:
        outcome = await translate_detailed(request.text, request.target_lang, chain)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception('Translation endpoint error', exc_info=exc)
        return _translation_failed(clean_text)

    if outcome.degraded:
        logger.warning('No provider produced a translation (%d chunks)', len(outcome.providers))
        return _translation_failed(outcome.translation)

    return TranslateTextResponse(translation=strip_markup(outcome.translation))


@translate_route.post('/translate/batch', response_model=BatchTranslationResponse)
async def translate_many(
    request: BatchTranslationRequest,
    chain: ProviderChain = Depends(get_provider_chain),
):
    translations = await translate_batch(request.texts, chain)
    return BatchTranslationResponse(translations=translations)


@translate_route.post('/summarize', response_model=TranslationResult)
async def summarize(
    request: SummarizeRequest,
    chain: ProviderChain = Depends(get_provider_chain),
):
    if request.language == 'en':
        return await summarize_in_english(request.title, request.text)
    return await summarize_and_translate(request.title, request.text, chain)


@translate_route.post('/proxy')
async def proxy(envelope: ProxyRequest, fastapi_request: Request):
    settings = get_settings()
    origin = envelope.origin.strip().lower()
    if origin not in {o.lower() for o in settings.proxy_allowed_origins}:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Origin not allowed')

    path = envelope.path if envelope.path.startswith('/') else f'/{envelope.path}'
    url = f'{envelope.protocol}://{origin}{path}'
    headers = {k: v for k, v in envelope.headers.items() if k.lower() not in _HOP_BY_HOP_HEADERS}

    # Relay directly, even when provider calls are configured to use a proxy
    outbound = OutboundClient(get_http_client(fastapi_request))
    try:
        upstream = await outbound.request(
            envelope.method,
            url,
            headers=headers,
            json=envelope.body if envelope.method == 'POST' else None,
        )
    except httpx.HTTPError as exc:
        logger.warning('Proxy request to %s failed: %s', origin, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail='Upstream request failed')

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get('content-type', 'application/json'),
    )

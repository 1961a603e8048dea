from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException


class TranslationError(Exception):
    """Base class for failures inside the translation pipeline."""


class ProviderError(TranslationError):
    """A provider answered with a non-2xx status or a payload we cannot read."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class EmptyResultError(ProviderError):
    """A provider answered, but the translation is blank."""


class SanitizationError(TranslationError):
    """Markup could not be parsed; callers recover with the regex fallback."""


class NoTranslationError(TranslationError):
    """Every provider in the chain failed or was rejected."""


# Routes whose only input is the text to translate
_VALIDATION_MESSAGES = {
    "/api/translate": "Invalid text provided",
}


def standard_error(status: int, code: str, message: str, details: dict | None = None):
    return {"error": {"status": status, "code": code, "message": message, "details": details or {}}}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        payload = standard_error(exc.status_code, "http_error", exc.detail if exc.detail else "HTTP error")
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = {"errors": jsonable_encoder(exc.errors())}
        message = _VALIDATION_MESSAGES.get(request.url.path, "Validation failed")
        payload = standard_error(400, "validation_error", message, details)
        return JSONResponse(status_code=400, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        payload = standard_error(500, "server_error", "Internal server error")
        return JSONResponse(status_code=500, content=payload)

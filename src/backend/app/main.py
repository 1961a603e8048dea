import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import get_settings
from .core.errors import register_exception_handlers
from .core.http import init_http_client, close_http_client
from .api.translate import translate_route as translate_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    await init_http_client(app)
    try:
        yield
    finally:
        # Shutdown
        await close_http_client(app)


app = FastAPI(title="News Translate API", lifespan=lifespan)
register_exception_handlers(app)

settings_for_cors = get_settings()
allow_origins = getattr(settings_for_cors, "cors_allow_origins", ["*"])
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)


@app.middleware("http")
async def security_headers(request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(translate_router)

from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache
from urllib.parse import urlsplit
import os
from dotenv import load_dotenv


DEFAULT_GOOGLE_TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"
DEFAULT_LIBRETRANSLATE_URL = "https://translate.argosopentech.com/translate"


class Settings(BaseSettings):
    app_name: str
    app_env: str
    log_level: str
    cors_allow_origins: List[str] = ["*"]
    google_translate_url: str = DEFAULT_GOOGLE_TRANSLATE_URL
    libretranslate_url: str = DEFAULT_LIBRETRANSLATE_URL
    libretranslate_api_key: str = ""
    translate_proxy_url: str = ""
    translate_user_agent: str = "Mozilla/5.0"
    max_chunk_size: int = 500
    min_translation_length: int = 10
    proxy_allowed_origins: List[str] = [
        "translate.googleapis.com",
        "translate.argosopentech.com",
    ]

    @classmethod
    def settings_customise_sources(cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings):
        # get_settings() reads the environment itself
        return (init_settings,)


def _split_csv(value: str | None) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def _host_of(url: str) -> str:
    return urlsplit(url).hostname or ''


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f'{name} must be an integer') from exc


@lru_cache()
def get_settings() -> Settings:
    load_dotenv()

    app_env = os.getenv('APP_ENV', 'development')
    log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    cors_allow_origins = _split_csv(os.getenv('CORS_ALLOW_ORIGINS')) or ["*"]

    google_translate_url = os.getenv('GOOGLE_TRANSLATE_URL', DEFAULT_GOOGLE_TRANSLATE_URL)
    libretranslate_url = os.getenv('LIBRETRANSLATE_URL', DEFAULT_LIBRETRANSLATE_URL)
    libretranslate_api_key = os.getenv('LIBRETRANSLATE_API_KEY', '')
    translate_proxy_url = os.getenv('TRANSLATE_PROXY_URL', '')
    translate_user_agent = os.getenv('TRANSLATE_USER_AGENT', 'Mozilla/5.0')

    max_chunk_size = _int_env('TRANSLATE_MAX_CHUNK_SIZE', 500)
    min_translation_length = _int_env('TRANSLATE_MIN_LENGTH', 10)

    # Relay only to the hosts the providers actually live on unless told otherwise
    proxy_allowed_origins = _split_csv(os.getenv('PROXY_ALLOWED_ORIGINS'))
    if not proxy_allowed_origins:
        proxy_allowed_origins = [
            host for host in (
                _host_of(google_translate_url),
                _host_of(libretranslate_url),
            ) if host
        ]

    return Settings(
        app_name="news-translate",
        app_env=app_env,
        log_level=log_level,
        cors_allow_origins=cors_allow_origins,
        google_translate_url=google_translate_url,
        libretranslate_url=libretranslate_url,
        libretranslate_api_key=libretranslate_api_key,
        translate_proxy_url=translate_proxy_url,
        translate_user_agent=translate_user_agent,
        max_chunk_size=max_chunk_size,
        min_translation_length=min_translation_length,
        proxy_allowed_origins=proxy_allowed_origins,
    )

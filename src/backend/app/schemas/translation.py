from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class TranslationResult(BaseModel):
    summary: str
    sentiment: Literal["positive", "negative", "neutral"]


class TranslationRequest(BaseModel):
    text: str
    target_lang: Literal["tr", "en"] = "tr"

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class TranslateTextResponse(BaseModel):
    translation: str


class BatchTranslationRequest(BaseModel):
    texts: List[str] = Field(default_factory=list)


class BatchTranslationResponse(BaseModel):
    translations: List[str]


class SummarizeRequest(BaseModel):
    title: str
    text: Optional[str] = None
    language: Literal["tr", "en"] = "tr"


class ProxyRequest(BaseModel):
    protocol: Literal["http", "https"] = "https"
    origin: str
    path: str = "/"
    method: Literal["GET", "POST"] = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = None

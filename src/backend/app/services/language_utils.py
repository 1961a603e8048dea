from __future__ import annotations

DEFAULT_TARGET_LANGUAGE = "tr"

LANGUAGE_LABELS: dict[str, str] = {
    "en": "English",
    "tr": "Turkish",
}

SUPPORTED_LANG_CODES = set(LANGUAGE_LABELS.keys())

# Translation always runs between the two supported languages
_SOURCE_FOR_TARGET: dict[str, str] = {
    "tr": "en",
    "en": "tr",
}


def normalize_code(code: str | None) -> str:
    if not code:
        return ""
    return code.strip().lower().split("-")[0]


def language_label(code: str | None) -> str:
    normalized = normalize_code(code)
    if not normalized:
        return LANGUAGE_LABELS[DEFAULT_TARGET_LANGUAGE]
    return LANGUAGE_LABELS.get(normalized, code or normalized)


def source_language_for(target: str) -> str:
    normalized = normalize_code(target)
    if normalized not in _SOURCE_FOR_TARGET:
        raise ValueError(f"Unsupported target language: {target}")
    return _SOURCE_FOR_TARGET[normalized]

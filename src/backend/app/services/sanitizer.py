from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from ..core.errors import SanitizationError

logger = logging.getLogger(__name__)

MIN_CLEAN_LENGTH = 10

# Elements whose boundaries separate words; inline tags join their text directly
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
    "li", "main", "nav", "ol", "p", "pre", "section", "table", "td", "th", "tr", "ul",
]

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

_URL_PATTERNS = [
    re.compile(r"https?://\S+", re.IGNORECASE),
    re.compile(r"www\.\S+", re.IGNORECASE),
    re.compile(r"\b(?:t\.co|bit\.ly|goo\.gl|tinyurl\.com|ow\.ly|buff\.ly)/\S+", re.IGNORECASE),
]

_TRACKING_PATTERNS = [
    re.compile(r"source=(?:twitter|web|facebook|instagram|reddit|telegram)\S*", re.IGNORECASE),
    re.compile(r"utm_[a-z_]+=[^\s&]*", re.IGNORECASE),
    re.compile(r"\bref=[^\s&]*", re.IGNORECASE),
    re.compile(r"\?[a-z_]+=\w+(?:&[a-z_]+=\w+)*", re.IGNORECASE),
]

_BOILERPLATE_PATTERNS = [
    re.compile(r"RSVP:", re.IGNORECASE),
    re.compile(r"Read more:", re.IGNORECASE),
    re.compile(r"Click here:", re.IGNORECASE),
    re.compile(r"\[…\]"),
    re.compile(r"\[\.\.\.\]"),
]


def _extract_text(html: str) -> str:
    try:
        soup = BeautifulSoup(html, "html.parser")
        for node in soup(["script", "style"]):
            node.decompose()
        for node in soup.find_all(_BLOCK_TAGS):
            node.insert_before(" ")
            node.insert_after(" ")
        container = soup.body or soup
        return container.get_text()
    except Exception as exc:  # pylint: disable=broad-except
        raise SanitizationError(f"Could not parse markup: {exc}") from exc


def _extract_text_or_fallback(html: str) -> str:
    try:
        return _extract_text(html)
    except SanitizationError as exc:
        logger.warning("%s, falling back to tag stripping", exc)
        return _TAG_RE.sub(" ", html)


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize(text: str) -> str:
    """Turn a news title/body into plain text worth sending to a provider.

    Markup, URLs, tracking parameters and feed boilerplate are removed and
    whitespace is collapsed. Anything shorter than ``MIN_CLEAN_LENGTH``
    characters afterwards comes back as an empty string.
    """
    if not text:
        return ""

    cleaned = _extract_text_or_fallback(text)

    # Everything after a pipe is usually a site name or a second headline
    cleaned = cleaned.split("|", 1)[0]

    for pattern in _URL_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    for pattern in _TRACKING_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    for pattern in _BOILERPLATE_PATTERNS:
        cleaned = pattern.sub("", cleaned)

    cleaned = _collapse_whitespace(cleaned)
    if len(cleaned) < MIN_CLEAN_LENGTH:
        return ""
    return cleaned


def strip_markup(html: str) -> str:
    if not html:
        return ""
    return _collapse_whitespace(_extract_text_or_fallback(html))

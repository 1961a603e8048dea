from __future__ import annotations

import re
from typing import Literal, Optional

Sentiment = Literal["positive", "negative", "neutral"]

POSITIVE_KEYWORDS = (
    "up", "rise", "gain", "bull", "surge", "rally", "boost", "grow",
    "positive", "profit", "success", "launch", "partner", "adoption",
)
NEGATIVE_KEYWORDS = (
    "down", "fall", "drop", "bear", "crash", "decline", "loss",
    "negative", "hack", "scam", "fail", "lawsuit", "ban", "regulate",
)

_POSITIVE_RE = re.compile(r"\b(?:" + "|".join(POSITIVE_KEYWORDS) + r")\b", re.IGNORECASE)
_NEGATIVE_RE = re.compile(r"\b(?:" + "|".join(NEGATIVE_KEYWORDS) + r")\b", re.IGNORECASE)


def classify_sentiment(title: str, text: Optional[str] = None) -> Sentiment:
    """Tag a headline by keyword; a negative keyword outranks a positive one."""
    content = f"{title or ''} {text or ''}".lower()
    sentiment: Sentiment = "neutral"
    if _POSITIVE_RE.search(content):
        sentiment = "positive"
    if _NEGATIVE_RE.search(content):
        sentiment = "negative"
    return sentiment

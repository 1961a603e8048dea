from __future__ import annotations

import re
from typing import List

DEFAULT_MAX_CHUNK_SIZE = 500

# A trailing run without terminal punctuation still counts as a sentence
_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)|[.!?]+")


def split_sentences(text: str) -> List[str]:
    return [match.group(0) for match in _SENTENCE_RE.finditer(text) if match.group(0).strip()]


def _split_oversized(sentence: str, max_size: int) -> List[str]:
    pieces: List[str] = []
    current = ""
    for word in sentence.split():
        while len(word) > max_size:
            if current:
                pieces.append(current)
                current = ""
            pieces.append(word[:max_size])
            word = word[max_size:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_size:
            current = candidate
        else:
            pieces.append(current)
            current = word
    if current:
        pieces.append(current)
    return pieces


def split_text_into_chunks(text: str, max_size: int = DEFAULT_MAX_CHUNK_SIZE) -> List[str]:
    """Pack whole sentences into chunks of at most ``max_size`` characters.

    Order is preserved and no text is dropped. A sentence that is longer
    than ``max_size`` on its own is broken at word boundaries.
    """
    if max_size <= 0:
        raise ValueError("max_size must be positive")
    text = (text or "").strip()
    if not text:
        return []
    if len(text) <= max_size:
        return [text]

    chunks: List[str] = []
    current = ""
    for sentence in split_sentences(text):
        if len(current) + len(sentence) <= max_size:
            current += sentence
            continue
        if current.strip():
            chunks.append(current.strip())
        current = ""
        if len(sentence.strip()) > max_size:
            chunks.extend(_split_oversized(sentence, max_size))
        else:
            current = sentence
    if current.strip():
        chunks.append(current.strip())
    return chunks

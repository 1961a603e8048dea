import pytest

from src.backend.app.services.chunker import split_sentences, split_text_into_chunks


def _long_text(count=40):
    return " ".join(f"Sentence number {i} is here." for i in range(count))


def test_short_text_is_a_single_chunk():
    assert split_text_into_chunks("Short news title.", 500) == ["Short news title."]


def test_empty_text_has_no_chunks():
    assert split_text_into_chunks("   ", 500) == []


def test_long_text_is_split_on_sentences_without_losing_any():
    text = _long_text()
    assert len(text) > 500

    chunks = split_text_into_chunks(text, 500)

    assert len(chunks) > 1
    assert all(len(chunk) <= 500 for chunk in chunks)
    assert all(chunk.endswith(".") for chunk in chunks)
    assert " ".join(chunks) == text


def test_trailing_text_without_punctuation_is_kept():
    text = "First sentence here. " * 40 + "tail without an ending"
    chunks = split_text_into_chunks(text, 500)
    assert chunks[-1].endswith("tail without an ending")
    assert " ".join(chunks) == text.strip()


def test_oversized_sentence_is_split_at_words():
    text = "word " * 200
    chunks = split_text_into_chunks(text, 500)
    assert all(len(chunk) <= 500 for chunk in chunks)
    assert " ".join(chunks).split() == text.split()


def test_unbroken_run_is_split_by_length():
    assert split_text_into_chunks("x" * 1200, 500) == ["x" * 500, "x" * 500, "x" * 200]


def test_split_sentences_keeps_terminal_punctuation():
    assert split_sentences("One. Two! Three? Four") == ["One.", " Two!", " Three?", " Four"]


def test_max_size_must_be_positive():
    with pytest.raises(ValueError):
        split_text_into_chunks("anything", 0)

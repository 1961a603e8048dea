import pytest

from src.backend.app.services.sentiment import classify_sentiment


@pytest.mark.parametrize(
    "title, expected",
    [
        ("prices surge after rally", "positive"),
        ("hack causes crash", "negative"),
        ("quarterly report released", "neutral"),
        ("Exchange launch draws a lawsuit", "negative"),
        ("PROFIT jumps at miner", "positive"),
    ],
)
def test_classify_title(title, expected):
    assert classify_sentiment(title) == expected


def test_body_text_is_considered():
    assert classify_sentiment("Quarterly report released", "shares drop in late trading") == "negative"


def test_keywords_match_whole_words_only():
    assert classify_sentiment("Protocol upgrade scheduled") == "neutral"
    assert classify_sentiment("Banner ads return to homepage") == "neutral"

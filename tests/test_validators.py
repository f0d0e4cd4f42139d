"""Tests for application message validation."""

import pytest

from app.utils.validators import count_words, validate_application_message


def message_of(length: int, words: int) -> str:
    """Build a message with an exact character length and word count."""
    base = ["w"] * words
    base[0] = "w" * (length - (2 * words - 1) + 1)
    message = " ".join(base)
    assert len(message) == length
    assert count_words(message) == words
    return message


class TestApplicationMessage:

    def test_49_characters_fails(self):
        is_valid, errors = validate_application_message(message_of(49, 10))
        assert not is_valid
        assert errors == ["Application message must be at least 50 characters"]

    def test_50_characters_with_10_words_passes(self):
        is_valid, errors = validate_application_message(message_of(50, 10))
        assert is_valid
        assert errors == []

    def test_500_characters_passes(self):
        is_valid, _ = validate_application_message(message_of(500, 40))
        assert is_valid

    def test_501_characters_fails(self):
        is_valid, errors = validate_application_message(message_of(501, 40))
        assert not is_valid
        assert errors == ["Application message cannot exceed 500 characters"]

    def test_50_characters_with_9_words_fails(self):
        is_valid, errors = validate_application_message(message_of(50, 9))
        assert not is_valid
        assert errors == ["Please provide a more detailed message (at least 10 words)"]

    def test_reports_every_violated_rule(self):
        is_valid, errors = validate_application_message("too short")
        assert not is_valid
        assert len(errors) == 2

    def test_missing_message(self):
        assert validate_application_message(None) == (False, ["Application message is required"])

    @pytest.mark.parametrize("text,expected", [
        ("one", 1),
        ("  leading and   trailing  ", 3),
        ("tabs\tand\nnewlines", 3),
        ("", 0),
    ])
    def test_count_words_splits_on_any_whitespace(self, text, expected):
        assert count_words(text) == expected

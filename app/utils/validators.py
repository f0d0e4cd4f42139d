"""Validators."""

from typing import List


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())


def validate_application_message(
    message: str,
    min_length: int = 50,
    max_length: int = 500,
    min_words: int = 10,
) -> tuple[bool, List[str]]:
    """Validate an application message against length and word-count rules."""
    errors = []

    if message is None:
        return False, ["Application message is required"]

    if len(message) < min_length:
        errors.append(f"Application message must be at least {min_length} characters")

    if len(message) > max_length:
        errors.append(f"Application message cannot exceed {max_length} characters")

    if count_words(message) < min_words:
        errors.append(f"Please provide a more detailed message (at least {min_words} words)")

    return len(errors) == 0, errors

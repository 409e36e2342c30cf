"""Text processing utility functions for backend records."""

import re
import unicodedata
from typing import Any
from urllib.parse import urlencode

# [1], [ 2, 3 ], [4-6], [7; 8]
CITATION_PATTERN = re.compile(r"\[\s*\d+(?:[\s,;-]*\d+)*\s*\]")
WHITESPACE_PATTERN = re.compile(r"\s+")
YEAR_PATTERN = re.compile(r"\d{4}")

YOUTUBE_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)

YOUTUBE_EMBED_PARAMS = {
    "autoplay": "0",
    "rel": "0",
    "modestbranding": "1",
    "iv_load_policy": "3",
}


def clean_text(value: Any) -> str:
    """Strip citation markers and collapse whitespace.

    Handles markers like ``[1]``, ``[ 1 ]``, ``[1, 2]`` and ``[1-3]``.
    Non-string values are stringified; None and empty values give "".

    Args:
        value: Raw free-text field

    Returns:
        Cleaned text
    """
    if value is None or value == "" or value is False:
        return ""

    text = str(value)

    # Removing "[2]" from "[1[2]]" exposes "[1]"
    while True:
        stripped = CITATION_PATTERN.sub("", text)
        if stripped == text:
            break
        text = stripped

    return WHITESPACE_PATTERN.sub(" ", text).strip()


def fold_for_match(text: Any) -> str:
    """Normalize text for case-insensitive substring matching.

    Vietnamese text arrives in both composed and decomposed forms, so
    everything is brought to NFC before lowercasing.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFC", str(text))
    return WHITESPACE_PATTERN.sub(" ", text).lower().strip()


def extract_year(value: Any) -> int | None:
    """Return the first four-digit run in a date-like value, if any."""
    if value is None or value == "":
        return None

    match = YEAR_PATTERN.search(str(value))
    if match:
        return int(match.group(0))
    return None


def youtube_embed_url(url: str | None) -> str | None:
    """Convert any YouTube watch/share URL into an embeddable URL."""
    if not url:
        return None

    match = YOUTUBE_PATTERN.search(url)
    if not match:
        return None

    return f"https://www.youtube.com/embed/{match.group(1)}?{urlencode(YOUTUBE_EMBED_PARAMS)}"

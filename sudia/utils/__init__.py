"""Utility modules for the data client."""

from sudia.utils.logging import setup_logging
from sudia.utils.text import (
    clean_text,
    extract_year,
    fold_for_match,
    youtube_embed_url,
)

__all__ = [
    # Logging
    "setup_logging",
    # Text utilities
    "clean_text",
    "fold_for_match",
    "extract_year",
    "youtube_embed_url",
]

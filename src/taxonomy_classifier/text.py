"""Text preprocessing utilities for keyword classification."""

import re
from pathlib import Path
from typing import AbstractSet, Optional

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

# Compiled regex for efficiency
_WHITESPACE_RE = re.compile(r'\s+')
_PUNCTUATION_RE = re.compile(r'[^\w\s]|_')


def sanitize_text(text: Optional[str]) -> str:
    """
    Clean up extracted text.

    - Handles None/empty values
    - Normalizes whitespace
    - Strips leading/trailing whitespace
    """
    if not text:
        return ""

    if not isinstance(text, str):
        text = str(text)

    # Normalize whitespace
    text = _WHITESPACE_RE.sub(' ', text)

    return text.strip()


def normalize_text(
    text: Optional[str],
    stopwords: AbstractSet[str] = ENGLISH_STOP_WORDS,
) -> str:
    """
    Normalize article text for keyword matching.

    Lowercases, replaces punctuation with spaces, removes stopwords and
    collapses whitespace. Keyword counting runs on the result as-is.

    Args:
        text: Raw extracted text.
        stopwords: Words to drop. Defaults to scikit-learn's English list.

    Returns:
        Normalized text, words separated by single spaces.
    """
    text = sanitize_text(text).lower()
    if not text:
        return ""

    text = _PUNCTUATION_RE.sub(' ', text)
    words = [w for w in text.split() if w not in stopwords]
    return ' '.join(words)


def count_words(text: Optional[str]) -> int:
    """Count whitespace-separated words in the raw text."""
    if not text:
        return 0
    return len(str(text).split())


def get_article_id(path: Path) -> str:
    """Article identifier derived from its file name."""
    return Path(path).stem

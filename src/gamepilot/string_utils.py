"""
Shared string normalization utilities used across the taxonomy and scoring modules.

Genre and mood lookups each use their own key form so that the alias tables,
the canonical enum values and raw platform strings all compare equal:
- genre keys: "Real-Time Strategy" -> "real time strategy"
- mood keys:  "Story Rich" -> "story-rich"
"""
import re
import unicodedata
from typing import Any

_WHITESPACE = re.compile(r"\s+")
_GENRE_SEPARATORS = re.compile(r"[\s_\-]+")
_MOOD_SEPARATORS = re.compile(r"[\s_]+")


def remove_diacritics(text: str) -> str:
    """
    Remove diacritics/accents from text.
    e.g., "Aventure épique" -> "Aventure epique"
    """
    if not text:
        return ""
    # Normalize to NFD (decomposed form), then remove combining marks
    normalized = unicodedata.normalize('NFD', text)
    return ''.join(c for c in normalized if unicodedata.category(c) != 'Mn')


def normalize_text(text: Any, lowercase: bool = True) -> str:
    """
    Normalize free text for substring matching.

    Applies NFC normalization, optional case folding and whitespace collapsing.
    Non-string input (None, numbers) is coerced so callers never have to guard.
    """
    if text is None:
        return ""
    text = unicodedata.normalize('NFC', str(text))
    if lowercase:
        text = text.casefold()
    return _WHITESPACE.sub(' ', text).strip()


def genre_key(raw: Any) -> str:
    """Lookup key for genre strings: lowercase, no accents, '&' spelled out, single spaces."""
    text = remove_diacritics(normalize_text(raw))
    text = text.replace('&', ' and ').replace("'", '')
    return _WHITESPACE.sub(' ', _GENRE_SEPARATORS.sub(' ', text)).strip()


def mood_key(raw: Any) -> str:
    """Lookup key for mood strings: lowercase, no accents, words joined by hyphens."""
    text = remove_diacritics(normalize_text(raw))
    text = _MOOD_SEPARATORS.sub('-', text)
    return re.sub(r'-{2,}', '-', text).strip('-')

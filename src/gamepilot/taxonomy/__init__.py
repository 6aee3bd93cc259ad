"""
Game Taxonomy - Vocabulary, Tables and Normalization
=====================================================
- Canonical GenreId / MoodId / MasterMoodId enumerations
- Validated static lookup tables (TaxonomyTables)
- Deterministic normalization of raw platform metadata
"""

from .normalize import (
    detect_genres_from_text,
    detect_moods_from_title,
    normalize_genre,
    normalize_genres,
    normalize_master_mood,
    normalize_mood,
    normalize_moods,
    normalize_tags,
)
from .tables import (
    DEFAULT_TABLES,
    TaxonomyConfigError,
    TaxonomyTables,
    tables_from_overrides,
    validate_tables,
)
from .vocabulary import (
    KNOWN_GENRES,
    KNOWN_MOODS,
    GenreId,
    MasterMoodId,
    MoodId,
    mood_sort_key,
)

__all__ = [
    # Vocabulary
    'GenreId',
    'MoodId',
    'MasterMoodId',
    'KNOWN_GENRES',
    'KNOWN_MOODS',
    'mood_sort_key',
    # Tables
    'DEFAULT_TABLES',
    'TaxonomyTables',
    'TaxonomyConfigError',
    'tables_from_overrides',
    'validate_tables',
    # Normalization
    'normalize_genre',
    'normalize_genres',
    'normalize_mood',
    'normalize_moods',
    'normalize_master_mood',
    'normalize_tags',
    'detect_genres_from_text',
    'detect_moods_from_title',
]

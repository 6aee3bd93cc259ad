"""
Game and context records.

GameRecord is the strict schema every scoring component reads. Raw library
data (dicts from a store import or a library file) is validated and normalized
exactly once, here, by build_game_record().
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .taxonomy import (
    GenreId,
    MoodId,
    TaxonomyTables,
    detect_genres_from_text,
    detect_moods_from_title,
    normalize_genre,
    normalize_genres,
    normalize_mood,
    normalize_moods,
    normalize_tags,
    mood_sort_key,
)

logger = logging.getLogger(__name__)

SHORT_SESSION_MAX_MINUTES = 30
MEDIUM_SESSION_MAX_MINUTES = 90

# Raw keys that may carry a session length, in priority order
_SESSION_KEYS = (
    "estimated_session_minutes",
    "estimatedSessionMinutes",
    "sessionTime",
    "averageSessionTime",
    "session_minutes",
)
_DIGITS = re.compile(r"[0-9]{1,6}")


class SessionBucket(str, Enum):
    """Coarse play-session length."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    def __str__(self) -> str:
        return self.value


def bucket_for_minutes(minutes: Optional[int]) -> Optional[SessionBucket]:
    """
    Bucket a session length: short (<=30), medium (31-90), long (>90).

    Returns None for a missing or non-positive length.
    """
    if minutes is None or minutes <= 0:
        return None
    if minutes <= SHORT_SESSION_MAX_MINUTES:
        return SessionBucket.SHORT
    if minutes <= MEDIUM_SESSION_MAX_MINUTES:
        return SessionBucket.MEDIUM
    return SessionBucket.LONG


def parse_session_bucket(raw: Any) -> SessionBucket:
    """
    Resolve a UI time selection to a bucket.

    Accepts bucket names and minute values ("15", 60, "120 min").
    Unrecognised input falls back to MEDIUM.
    """
    if isinstance(raw, SessionBucket):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        for bucket in SessionBucket:
            if text == bucket.value:
                return bucket
    minutes = parse_minutes(raw)
    return bucket_for_minutes(minutes) or SessionBucket.MEDIUM


def parse_minutes(raw: Any) -> Optional[int]:
    """Extract a positive minute count from ints, floats or strings like '45 min'."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        minutes = raw
    elif isinstance(raw, float):
        # inf and nan are treated as an unknown length
        if not math.isfinite(raw):
            return None
        minutes = int(raw)
    elif isinstance(raw, str):
        match = _DIGITS.search(raw)
        if not match:
            return None
        minutes = int(match.group())
    else:
        return None
    return minutes if minutes > 0 else None


@dataclass(frozen=True)
class GameRecord:
    """
    A library game in canonical form.

    Attributes:
        id: Stable identifier
        title: Display title
        genres: Canonical genres, ordered, no duplicates, no UNKNOWN
        moods: Explicit canonical moods (may be empty)
        tags: Free-form tags
        description: Optional description text
        estimated_session_minutes: Optional typical session length
        release_year: Optional release year
    """
    id: str
    title: str = ""
    genres: Tuple[GenreId, ...] = ()
    moods: FrozenSet[MoodId] = frozenset()
    tags: Tuple[str, ...] = ()
    description: Optional[str] = None
    estimated_session_minutes: Optional[int] = None
    release_year: Optional[int] = None

    @property
    def session_bucket(self) -> Optional[SessionBucket]:
        return bucket_for_minutes(self.estimated_session_minutes)


@dataclass(frozen=True)
class UserContext:
    """Momentary recommendation context. mood=None means no mood preference."""
    mood: Optional[MoodId] = None
    session: SessionBucket = SessionBucket.MEDIUM
    preferred_genre: Optional[GenreId] = None

    def __post_init__(self):
        if self.mood is MoodId.UNKNOWN:
            object.__setattr__(self, "mood", None)
        if self.preferred_genre is GenreId.UNKNOWN:
            object.__setattr__(self, "preferred_genre", None)

    @property
    def is_neutral(self) -> bool:
        return self.mood is None

    @classmethod
    def from_raw(
        cls,
        mood: Any = None,
        time: Any = None,
        genre: Any = None,
        tables: Optional[TaxonomyTables] = None,
    ) -> "UserContext":
        """
        Build a context from UI selections.

        An empty or unrecognised mood is neutral; an unrecognised genre is no
        preference.
        """
        resolved_mood = normalize_mood(mood, tables) if mood else None
        resolved_genre = normalize_genre(genre, tables) if genre not in (None, "") else None
        return cls(
            mood=resolved_mood,
            session=parse_session_bucket(time),
            preferred_genre=resolved_genre,
        )


def _first_present(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _release_year(raw: Mapping[str, Any]) -> Optional[int]:
    value = _first_present(raw, ("release_year", "releaseYear", "releaseDate", "release_date"))
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    match = re.search(r"\b(\d{4})\b", str(value))
    return int(match.group(1)) if match else None


def build_game_record(
    raw: Mapping[str, Any],
    *,
    tables: Optional[TaxonomyTables] = None,
    genres_from_tags: bool = False,
    detect_genres: bool = False,
    emotional_tags: bool = False,
    title_moods: bool = False,
) -> GameRecord:
    """
    Validate and normalize a raw game dict into a GameRecord.

    Args:
        raw: Raw game data (keys as produced by the library store)
        tables: Taxonomy tables (defaults when None)
        genres_from_tags: When no genre resolves, derive genres from tags
        detect_genres: When still no genre, guess from title/description keywords
        emotional_tags: Merge the raw emotionalTags field into the explicit moods
        title_moods: When no explicit mood resolves, take moods from known title patterns

    Returns:
        GameRecord

    Raises:
        ValueError: if the record has no id
    """
    game_id = raw.get("id", raw.get("appid"))
    if game_id is None or str(game_id).strip() == "":
        raise ValueError(f"Game record has no id: {raw.get('title') or raw.get('name')!r}")

    title = str(raw.get("title") or raw.get("name") or "").strip()
    description = raw.get("description") or raw.get("short_description")
    description = str(description) if description else None
    tags = normalize_tags(raw.get("tags"))

    genres = normalize_genres(raw.get("genres") or raw.get("genre"), tables)
    if not genres and genres_from_tags and tags:
        genres = normalize_genres(tags, tables)
        if genres:
            logger.debug(f"Genres for {title!r} derived from tags: {[g.value for g in genres]}")
    if not genres and detect_genres:
        genres = detect_genres_from_text(title, description)
        if genres:
            logger.debug(f"Genres for {title!r} detected from text: {[g.value for g in genres]}")

    moods = normalize_moods(raw.get("moods"), tables)
    if emotional_tags:
        moods = moods | normalize_moods(raw.get("emotionalTags") or raw.get("emotional_tags"), tables)
    if not moods and title_moods:
        moods = detect_moods_from_title(title)
        if moods:
            logger.debug(f"Moods for {title!r} taken from title patterns: {sorted(m.value for m in moods)}")

    return GameRecord(
        id=str(game_id).strip(),
        title=title,
        genres=tuple(genres),
        moods=moods,
        tags=tuple(tags),
        description=description,
        estimated_session_minutes=parse_minutes(_first_present(raw, _SESSION_KEYS)),
        release_year=_release_year(raw),
    )


def record_to_dict(game: GameRecord) -> Dict[str, Any]:
    """Plain-data view of a record (canonical ids as strings)."""
    return {
        "id": game.id,
        "title": game.title,
        "genres": [g.value for g in game.genres],
        "moods": [m.value for m in sorted(game.moods, key=mood_sort_key)],
        "tags": list(game.tags),
        "description": game.description,
        "estimated_session_minutes": game.estimated_session_minutes,
        "release_year": game.release_year,
    }

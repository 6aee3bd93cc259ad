"""
Taxonomy Normalization Module
=============================
Deterministic mapping of raw genre/mood metadata onto the canonical vocabulary.

Rules:
- Lowercase + trim, remove diacritics
- Numeric genre input (int or all-digit string) resolves through the platform
  genre index before string matching
- Exact canonical value wins, then the alias table
- Anything else resolves to UNKNOWN; normalization never raises
- Canonical input is returned unchanged (idempotent)
"""

import logging
import re
from collections import abc
from typing import Any, List, Mapping, Optional, FrozenSet

from ..string_utils import genre_key, mood_key, normalize_text
from .tables import DEFAULT_TABLES, TaxonomyTables
from .vocabulary import GenreId, MasterMoodId, MoodId

logger = logging.getLogger(__name__)

_GENRES_BY_VALUE = {g.value: g for g in GenreId}
_MOODS_BY_VALUE = {m.value: m for m in MoodId}
_MASTER_MOODS_BY_VALUE = {m.value: m for m in MasterMoodId}

# Keyword-driven genre detection from title/description text.
# Only consulted when a record carries no usable genre data.
TEXT_GENRE_KEYWORDS = {
    GenreId.ACTION: ("shoot", "battle", "combat", "fight", "assassin", "hitman", "battlefield", "weapon"),
    GenreId.ADVENTURE: ("tomb raider", "uncharted", "journey", "explor", "island", "zelda", "treasure"),
    GenreId.RPG: ("rpg", "role-playing", "dragon", "dungeon", "wizard", "skyrim", "witcher", "baldur"),
    GenreId.STRATEGY: ("civilization", "total war", "starcraft", "conquer", "tactics", "strategy", "chess"),
    GenreId.SIMULATION: ("tycoon", "city builder", "simulator", "farming", "management", "construction"),
    GenreId.SPORTS: ("football", "soccer", "nba", "fifa", "madden", "basketball", "tennis", "golf", "hockey"),
    GenreId.PUZZLE: ("puzzle", "tetris", "sudoku", "crossword", "match-3"),
    GenreId.HORROR: ("resident evil", "silent hill", "outlast", "zombie", "haunted", "horror"),
    GenreId.RACING: ("racing", "forza", "gran turismo", "kart", "rally", "motorcycle"),
    GenreId.SHOOTER: ("fps", "first-person shooter", "quake", "doom", "halo", "overwatch"),
    GenreId.PLATFORMER: ("platformer", "mario", "sonic", "megaman", "meat boy"),
    GenreId.ROGUELIKE: ("roguelike", "roguelite", "permadeath", "procedural"),
}

# Title fragments of well-known games whose store genres mislead mood inference.
# Only consulted when a record carries no explicit moods; matched on whole words.
TITLE_MOOD_PATTERNS = {
    # Multiplayer
    "left 4 dead": (MoodId.SOCIAL,),
    "rocket league": (MoodId.SOCIAL, MoodId.COMPETITIVE),
    "rust": (MoodId.SOCIAL,),
    "dayz": (MoodId.SOCIAL,),
    "apex legends": (MoodId.SOCIAL, MoodId.COMPETITIVE),
    "pubg": (MoodId.SOCIAL, MoodId.COMPETITIVE),
    "fortnite": (MoodId.SOCIAL, MoodId.COMPETITIVE),
    "overwatch": (MoodId.SOCIAL,),
    "valheim": (MoodId.SOCIAL,),
    "don't starve together": (MoodId.SOCIAL,),
    "squad": (MoodId.SOCIAL,),
    "hell let loose": (MoodId.SOCIAL,),
    "insurgency": (MoodId.SOCIAL, MoodId.STRATEGIC),
    "hunt: showdown": (MoodId.SOCIAL, MoodId.COMPETITIVE),
    "pummel party": (MoodId.SOCIAL,),
    # Building and sandbox
    "terraria": (MoodId.CREATIVE,),
    "minecraft": (MoodId.CREATIVE,),
    "starbound": (MoodId.CREATIVE,),
    "rimworld": (MoodId.CREATIVE, MoodId.STRATEGIC),
    "project zomboid": (MoodId.CREATIVE,),
    "core keeper": (MoodId.CREATIVE, MoodId.SOCIAL),
    "forager": (MoodId.CREATIVE, MoodId.RELAXING),
    "garry's mod": (MoodId.CREATIVE, MoodId.EXPERIMENTAL),
    "7 days to die": (MoodId.CREATIVE,),
    "kenshi": (MoodId.CREATIVE,),
    # Classics
    "command & conquer": (MoodId.NOSTALGIC, MoodId.STRATEGIC),
    "age of empires": (MoodId.NOSTALGIC, MoodId.STRATEGIC),
    "company of heroes": (MoodId.NOSTALGIC, MoodId.STRATEGIC),
    "fallout": (MoodId.NOSTALGIC, MoodId.STORY_RICH),
    "dark souls": (MoodId.NOSTALGIC, MoodId.CHALLENGING),
    "metal gear solid": (MoodId.NOSTALGIC, MoodId.STORY_RICH),
    "baldur's gate": (MoodId.NOSTALGIC, MoodId.STORY_RICH),
    "witcher": (MoodId.NOSTALGIC, MoodId.STORY_RICH),
    "god of war": (MoodId.NOSTALGIC, MoodId.ACTION_PACKED),
    # Strategy
    "civilization": (MoodId.STRATEGIC, MoodId.CHALLENGING),
    "starcraft": (MoodId.STRATEGIC, MoodId.COMPETITIVE),
    "total war": (MoodId.STRATEGIC, MoodId.CHALLENGING),
    "xcom": (MoodId.STRATEGIC, MoodId.CHALLENGING),
    # Action
    "call of duty": (MoodId.INTENSE, MoodId.COMPETITIVE),
    "battlefield": (MoodId.INTENSE, MoodId.COMPETITIVE),
    "doom": (MoodId.INTENSE, MoodId.ACTION_PACKED),
    "quake": (MoodId.INTENSE, MoodId.ACTION_PACKED),
    "halo": (MoodId.ACTION_PACKED, MoodId.COMPETITIVE),
    "wrestling": (MoodId.INTENSE, MoodId.COMPETITIVE, MoodId.ACTION_PACKED),
    # Story and atmosphere
    "skyrim": (MoodId.STORY_RICH, MoodId.ATMOSPHERIC),
    "elden ring": (MoodId.CHALLENGING, MoodId.ATMOSPHERIC),
    "final fantasy": (MoodId.STORY_RICH, MoodId.ATMOSPHERIC),
    "silent hill": (MoodId.GRITTY, MoodId.ATMOSPHERIC),
    "amnesia": (MoodId.GRITTY, MoodId.ATMOSPHERIC),
    "outlast": (MoodId.GRITTY, MoodId.INTENSE),
    "dead space": (MoodId.GRITTY, MoodId.INTENSE, MoodId.CHALLENGING),
    # Indie
    "hollow knight": (MoodId.CHALLENGING, MoodId.ATMOSPHERIC),
    "celeste": (MoodId.CHALLENGING,),
    "undertale": (MoodId.STORY_RICH, MoodId.EXPERIMENTAL),
    "cuphead": (MoodId.CHALLENGING, MoodId.NOSTALGIC),
    "dead cells": (MoodId.CHALLENGING, MoodId.INTENSE),
}

_TITLE_MOOD_REGEXES = tuple(
    (re.compile(rf"(?<!\w){re.escape(pattern)}(?!\w)"), moods)
    for pattern, moods in TITLE_MOOD_PATTERNS.items()
)

# Maximum genres added by text detection for a single record
MAX_DETECTED_GENRES = 2

# Longest digit string treated as a platform genre index
MAX_GENRE_INDEX_DIGITS = 9


def _tables(tables: Optional[TaxonomyTables]) -> TaxonomyTables:
    return tables if tables is not None else DEFAULT_TABLES


def _unwrap(raw: Any) -> Any:
    """Pull an id/name out of dict-shaped entries like {'id': 1, 'name': 'Action'}."""
    if isinstance(raw, Mapping):
        # A textual name beats a numeric id when both exist
        name = raw.get("name") or raw.get("description") or raw.get("label")
        if isinstance(name, str) and name.strip():
            return name
        return raw.get("id")
    return raw


def _genre_index_key(raw: Any) -> Optional[int]:
    """Platform genre index for int or ASCII-digit input; None for anything else."""
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    # Unicode digits ("²") and oversized strings are not platform ids
    if not (text.isascii() and text.isdigit()) or len(text) > MAX_GENRE_INDEX_DIGITS:
        return None
    return int(text)


def _as_list(raws: Any) -> List[Any]:
    """A raw list field as a list; a lone string or mapping is one item, other scalars are absent."""
    if raws is None or isinstance(raws, (bytes, bytearray)):
        return []
    if isinstance(raws, (str, Mapping)):
        return [raws]
    if isinstance(raws, abc.Iterable):
        return list(raws)
    return []


# =============================================================================
# Genres
# =============================================================================

def normalize_genre(raw: Any, tables: Optional[TaxonomyTables] = None) -> GenreId:
    """
    Normalize one raw genre value to a canonical GenreId.

    Accepts canonical ids, names ("Action", "Massively Multiplayer"), store
    tags ("Souls-like"), platform numeric ids (23, "23") and dict entries.

    Returns:
        GenreId (UNKNOWN for anything unrecognised)
    """
    if isinstance(raw, GenreId):
        return raw
    raw = _unwrap(raw)
    if raw is None or isinstance(raw, bool):
        return GenreId.UNKNOWN

    tbl = _tables(tables)

    index = _genre_index_key(raw)
    if index is not None:
        name = tbl.genre_index.get(index)
        if name is None:
            logger.debug(f"Unmapped genre index: {raw}")
            return GenreId.UNKNOWN
        raw = name

    if not isinstance(raw, str):
        return GenreId.UNKNOWN

    key = genre_key(raw)
    if not key:
        return GenreId.UNKNOWN

    canonical = _GENRES_BY_VALUE.get(key)
    if canonical is not None:
        return canonical
    return tbl.genre_aliases.get(key, GenreId.UNKNOWN)


def normalize_genres(raws: Any, tables: Optional[TaxonomyTables] = None) -> List[GenreId]:
    """
    Normalize a raw genre list, dropping UNKNOWN and duplicates, preserving order.

    A single string or numeric id is treated as a one-element list. None and
    other scalars yield [].
    """
    if isinstance(raws, int) and not isinstance(raws, bool):
        raws = [raws]

    result: List[GenreId] = []
    seen = set()
    for raw in _as_list(raws):
        genre = normalize_genre(raw, tables)
        if genre is GenreId.UNKNOWN or genre in seen:
            continue
        seen.add(genre)
        result.append(genre)
    return result


def detect_genres_from_text(title: Any, description: Any = None) -> List[GenreId]:
    """
    Guess genres from title/description keywords.

    Returns at most MAX_DETECTED_GENRES genres in table order.
    """
    text = f"{normalize_text(title)} {normalize_text(description)}".strip()
    if not text:
        return []
    detected = [
        genre for genre, keywords in TEXT_GENRE_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    ]
    return detected[:MAX_DETECTED_GENRES]


# =============================================================================
# Moods
# =============================================================================

def normalize_mood(raw: Any, tables: Optional[TaxonomyTables] = None) -> MoodId:
    """
    Normalize one raw mood value to a canonical MoodId.

    Accepts canonical ids in any case/spacing ("Story Rich"), legacy names
    ("chill"), store categories ("Multi-player") and dict entries
    ({"moodId": ...}, {"id": ...}).

    Returns:
        MoodId (UNKNOWN for anything unrecognised)
    """
    if isinstance(raw, MoodId):
        return raw
    if isinstance(raw, Mapping):
        raw = raw.get("moodId") or _unwrap(raw)
    if not isinstance(raw, str):
        return MoodId.UNKNOWN

    key = mood_key(raw)
    if not key:
        return MoodId.UNKNOWN

    canonical = _MOODS_BY_VALUE.get(key)
    if canonical is not None:
        return canonical
    return _tables(tables).mood_aliases.get(key, MoodId.UNKNOWN)


def normalize_moods(raws: Any, tables: Optional[TaxonomyTables] = None) -> FrozenSet[MoodId]:
    """Normalize a raw mood list into a set of canonical moods, dropping UNKNOWN."""
    moods = (normalize_mood(raw, tables) for raw in _as_list(raws))
    return frozenset(m for m in moods if m is not MoodId.UNKNOWN)


def detect_moods_from_title(title: Any) -> FrozenSet[MoodId]:
    """Union of the moods for every title pattern found as whole words in the title."""
    text = normalize_text(title).replace("’", "'")
    if not text:
        return frozenset()
    moods = set()
    for regex, pattern_moods in _TITLE_MOOD_REGEXES:
        if regex.search(text):
            moods.update(pattern_moods)
    return frozenset(moods)


def normalize_master_mood(raw: Any) -> Optional[MasterMoodId]:
    """Resolve a master mood id; None when it is not a known grouping."""
    if isinstance(raw, MasterMoodId):
        return raw
    if not isinstance(raw, str):
        return None
    return _MASTER_MOODS_BY_VALUE.get(mood_key(raw))


def normalize_tags(raws: Any) -> List[str]:
    """Clean free-form tags: text only, trimmed, duplicates removed (case-insensitive)."""
    tags: List[str] = []
    seen = set()
    for raw in _as_list(raws):
        value = _unwrap(raw)
        if not isinstance(value, str):
            continue
        tag = " ".join(value.split())
        if not tag or tag.casefold() in seen:
            continue
        seen.add(tag.casefold())
        tags.append(tag)
    return tags

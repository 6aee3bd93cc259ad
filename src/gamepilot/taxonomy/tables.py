"""
Taxonomy Tables
===============
Static, hand-authored lookup tables that drive normalization, mood inference,
scoring and browse filtering.

Tables:
- genre_index: platform numeric genre id -> platform genre name (Steam ids)
- genre_aliases: raw genre/tag name -> GenreId
- mood_aliases: raw mood/category name -> MoodId
- genre_moods: GenreId -> moods implied by that genre (exhaustive)
- mood_compatibility: MoodId -> moods that partially satisfy it (exhaustive)
- mood_genre_weights: MoodId -> {GenreId: weight} (exhaustive)
- mood_keywords: MoodId -> description keywords (exhaustive)
- master_moods: MasterMoodId -> sub-moods (exhaustive, non-empty)

Every table is validated when a TaxonomyTables instance is built. A table that
references an id outside the canonical enumerations, or that misses an enum
member it must cover, raises TaxonomyConfigError at construction time.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from ..string_utils import genre_key, mood_key
from .vocabulary import (
    KNOWN_GENRES,
    KNOWN_MOODS,
    GenreId,
    MasterMoodId,
    MoodId,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", GenreId, MoodId, MasterMoodId)


class TaxonomyConfigError(ValueError):
    """A taxonomy table references an id outside the canonical vocabulary."""


# =============================================================================
# Platform genre index (Steam store genre ids)
# =============================================================================

GENRE_INDEX_TABLE: Dict[int, str] = {
    1: "Action",
    2: "Strategy",
    3: "RPG",
    4: "Casual",
    9: "Racing",
    18: "Sports",
    23: "Indie",
    25: "Adventure",
    28: "Simulation",
    29: "Massively Multiplayer",
    37: "Free to Play",
    51: "Animation & Modeling",
    52: "Audio Production",
    54: "Education",
    57: "Utilities",
    58: "Video Production",
    59: "Web Publishing",
    60: "Game Development",
    70: "Early Access",
}


# =============================================================================
# Genre aliases - platform genre names and store tags
# =============================================================================

GENRE_ALIAS_TABLE: Dict[str, GenreId] = {
    # Store genres
    "Massively Multiplayer": GenreId.MULTIPLAYER,
    "Family": GenreId.CASUAL,
    "Board Games": GenreId.PUZZLE,
    "Educational": GenreId.PUZZLE,
    "Education": GenreId.PUZZLE,
    "Free to Play": GenreId.CASUAL,
    "Early Access": GenreId.INDIE,
    "Animation & Modeling": GenreId.SIMULATION,
    "Accounting": GenreId.SIMULATION,
    "Audio Production": GenreId.CASUAL,
    "Video Production": GenreId.CASUAL,
    "Utilities": GenreId.CASUAL,
    "Web Publishing": GenreId.CASUAL,
    "Game Development": GenreId.CASUAL,
    # Genre variants
    "FPS": GenreId.SHOOTER,
    "First-Person Shooter": GenreId.SHOOTER,
    "Third-Person Shooter": GenreId.SHOOTER,
    "Fighting": GenreId.ACTION,
    "Real-Time Strategy": GenreId.STRATEGY,
    "RTS": GenreId.STRATEGY,
    "Turn-Based Strategy": GenreId.STRATEGY,
    "4X": GenreId.STRATEGY,
    "Grand Strategy": GenreId.STRATEGY,
    "Tactical": GenreId.STRATEGY,
    "Point & Click": GenreId.PUZZLE,
    "Hidden Object": GenreId.PUZZLE,
    "Visual Novel": GenreId.RPG,
    "Role-Playing": GenreId.RPG,
    "Role Playing Game": GenreId.RPG,
    "JRPG": GenreId.RPG,
    "Action RPG": GenreId.RPG,
    "Card Game": GenreId.PUZZLE,
    "Board Game": GenreId.PUZZLE,
    "Roguelite": GenreId.ROGUELIKE,
    "Rogue-like": GenreId.ROGUELIKE,
    "Rogue-lite": GenreId.ROGUELIKE,
    "Platform": GenreId.PLATFORMER,
    "Platforming": GenreId.PLATFORMER,
    # Store tags
    "Open World": GenreId.ADVENTURE,
    "Survival": GenreId.HORROR,
    "Survival Horror": GenreId.HORROR,
    "Crafting": GenreId.SIMULATION,
    "Building": GenreId.SIMULATION,
    "Sandbox": GenreId.SIMULATION,
    "Exploration": GenreId.ADVENTURE,
    "Fantasy": GenreId.RPG,
    "Sci-fi": GenreId.RPG,
    "Comedy": GenreId.CASUAL,
    "Drama": GenreId.RPG,
    "Mystery": GenreId.ADVENTURE,
    "Thriller": GenreId.HORROR,
    "Stealth": GenreId.ACTION,
    "Hack and Slash": GenreId.ACTION,
    "Beat 'em up": GenreId.ACTION,
    "Metroidvania": GenreId.PLATFORMER,
    "Souls-like": GenreId.RPG,
    "Dungeon Crawler": GenreId.RPG,
    "Tower Defense": GenreId.STRATEGY,
    "Real-Time Tactics": GenreId.STRATEGY,
    "Turn-Based Tactics": GenreId.STRATEGY,
    "Wargame": GenreId.STRATEGY,
    "Management": GenreId.SIMULATION,
    "Tycoon": GenreId.SIMULATION,
    "Business Sim": GenreId.SIMULATION,
    "Life Sim": GenreId.SIMULATION,
    "Farming Sim": GenreId.SIMULATION,
    "Dating Sim": GenreId.SIMULATION,
    "Tabletop": GenreId.PUZZLE,
    "Party": GenreId.CASUAL,
    "Family Friendly": GenreId.CASUAL,
    "Trivia": GenreId.PUZZLE,
    "Music": GenreId.CASUAL,
    "Rhythm": GenreId.CASUAL,
    "Fitness": GenreId.SPORTS,
    "Driving": GenreId.RACING,
    "Flight": GenreId.SIMULATION,
    "Space": GenreId.SIMULATION,
    "Naval": GenreId.SIMULATION,
    "Military": GenreId.ACTION,
    "Historical": GenreId.STRATEGY,
    "Mythology": GenreId.RPG,
    "Pirate": GenreId.ADVENTURE,
    "Western": GenreId.ACTION,
    "Martial Arts": GenreId.ACTION,
    "Superhero": GenreId.ACTION,
    "Cyberpunk": GenreId.RPG,
    "Post-apocalyptic": GenreId.HORROR,
    "Zombie": GenreId.HORROR,
    "Vampire": GenreId.HORROR,
    "Gothic": GenreId.HORROR,
    "Lovecraftian": GenreId.HORROR,
    "Co-op": GenreId.MULTIPLAYER,
    "Local Co-op": GenreId.MULTIPLAYER,
    "Online Co-op": GenreId.MULTIPLAYER,
    "PvP": GenreId.MULTIPLAYER,
    "PvE": GenreId.CASUAL,
    "MMO": GenreId.MULTIPLAYER,
    "MMORPG": GenreId.MULTIPLAYER,
    "Online": GenreId.MULTIPLAYER,
    "LAN": GenreId.MULTIPLAYER,
    "Split Screen": GenreId.MULTIPLAYER,
    "Shared Screen": GenreId.MULTIPLAYER,
    "Local Multiplayer": GenreId.MULTIPLAYER,
    "Asymmetric Multiplayer": GenreId.MULTIPLAYER,
    "Battle Royale": GenreId.SHOOTER,
    "Arena Shooter": GenreId.SHOOTER,
}


# =============================================================================
# Mood aliases - legacy mood names, emotional tags, store categories
# =============================================================================

MOOD_ALIAS_TABLE: Dict[str, MoodId] = {
    # Legacy mood vocabulary
    "calm": MoodId.RELAXING,
    "chill": MoodId.RELAXING,
    "peaceful": MoodId.RELAXING,
    "zen": MoodId.RELAXING,
    "cozy": MoodId.RELAXING,
    "wholesome": MoodId.RELAXING,
    "create": MoodId.CREATIVE,
    "building": MoodId.CREATIVE,
    "crafting": MoodId.CREATIVE,
    "sandbox": MoodId.CREATIVE,
    "artistic": MoodId.CREATIVE,
    "tactical": MoodId.STRATEGIC,
    "planning": MoodId.STRATEGIC,
    "thinking": MoodId.STRATEGIC,
    "focused": MoodId.STRATEGIC,
    "immersive": MoodId.ATMOSPHERIC,
    "exploratory": MoodId.ATMOSPHERIC,
    "scary": MoodId.ATMOSPHERIC,
    "difficult": MoodId.CHALLENGING,
    "hard": MoodId.CHALLENGING,
    "fast-paced": MoodId.HIGH_ENERGY,
    "adrenaline": MoodId.HIGH_ENERGY,
    "energetic": MoodId.HIGH_ENERGY,
    "energy": MoodId.HIGH_ENERGY,
    "narrative": MoodId.STORY_RICH,
    "story": MoodId.STORY_RICH,
    "story-driven": MoodId.STORY_RICH,
    "storydriven": MoodId.STORY_RICH,
    "pvp": MoodId.COMPETITIVE,
    "versus": MoodId.COMPETITIVE,
    "multiplayer": MoodId.SOCIAL,
    "co-op": MoodId.SOCIAL,
    "cooperative": MoodId.SOCIAL,
    "party": MoodId.SOCIAL,
    "team-based": MoodId.SOCIAL,
    "retro": MoodId.NOSTALGIC,
    "classic": MoodId.NOSTALGIC,
    "remastered": MoodId.NOSTALGIC,
    "throwback": MoodId.NOSTALGIC,
    "action": MoodId.INTENSE,
    "weird": MoodId.SURREAL,
    "brain-power": MoodId.STRATEGIC,
    "puzzle": MoodId.MINDFUL,
    # Store categories
    "Single-player": MoodId.RELAXING,
    "Multi-player": MoodId.SOCIAL,
    "Online Co-op": MoodId.SOCIAL,
    "LAN Co-op": MoodId.SOCIAL,
    "Local Co-op": MoodId.SOCIAL,
    "Shared/Split Screen": MoodId.SOCIAL,
    "Cross-Platform Multiplayer": MoodId.SOCIAL,
    "MMO": MoodId.SOCIAL,
    "Remote Play Together": MoodId.SOCIAL,
    "Stats": MoodId.COMPETITIVE,
    "Achievements": MoodId.COMPETITIVE,
    "Steam Leaderboards": MoodId.COMPETITIVE,
    "VR Support": MoodId.HIGH_ENERGY,
}


# =============================================================================
# Genre -> implied moods (mood inference)
# =============================================================================

GENRE_MOOD_TABLE: Dict[GenreId, FrozenSet[MoodId]] = {
    GenreId.ACTION: frozenset({MoodId.INTENSE, MoodId.ACTION_PACKED, MoodId.CHALLENGING}),
    GenreId.ADVENTURE: frozenset({MoodId.STORY_RICH, MoodId.ATMOSPHERIC}),
    GenreId.RPG: frozenset({MoodId.STORY_RICH, MoodId.CHALLENGING}),
    GenreId.STRATEGY: frozenset({MoodId.STRATEGIC, MoodId.CHALLENGING}),
    GenreId.SIMULATION: frozenset({MoodId.CREATIVE, MoodId.RELAXING}),
    GenreId.SPORTS: frozenset({MoodId.COMPETITIVE, MoodId.HIGH_ENERGY}),
    GenreId.RACING: frozenset({MoodId.HIGH_ENERGY, MoodId.COMPETITIVE}),
    GenreId.INDIE: frozenset({MoodId.EXPERIMENTAL}),
    GenreId.CASUAL: frozenset({MoodId.RELAXING, MoodId.SOCIAL}),
    GenreId.SHOOTER: frozenset({MoodId.INTENSE, MoodId.COMPETITIVE, MoodId.ACTION_PACKED}),
    GenreId.HORROR: frozenset({MoodId.GRITTY, MoodId.ATMOSPHERIC, MoodId.CHALLENGING}),
    GenreId.PUZZLE: frozenset({MoodId.MINDFUL, MoodId.CHALLENGING}),
    GenreId.PLATFORMER: frozenset({MoodId.HIGH_ENERGY, MoodId.CHALLENGING}),
    GenreId.MOBA: frozenset({MoodId.COMPETITIVE, MoodId.SOCIAL, MoodId.STRATEGIC}),
    GenreId.ROGUELIKE: frozenset({MoodId.CHALLENGING, MoodId.EXPERIMENTAL}),
    GenreId.MULTIPLAYER: frozenset({MoodId.SOCIAL}),
}


# =============================================================================
# Scoring tables (keyed by target mood)
# =============================================================================

MOOD_COMPATIBILITY_TABLE: Dict[MoodId, FrozenSet[MoodId]] = {
    MoodId.INTENSE: frozenset({MoodId.ACTION_PACKED, MoodId.HIGH_ENERGY, MoodId.GRITTY, MoodId.CHALLENGING}),
    MoodId.STRATEGIC: frozenset({MoodId.CHALLENGING, MoodId.EXPERIMENTAL, MoodId.MINDFUL}),
    MoodId.RELAXING: frozenset({MoodId.MINDFUL, MoodId.CREATIVE, MoodId.ATMOSPHERIC}),
    MoodId.CREATIVE: frozenset(),
    MoodId.HIGH_ENERGY: frozenset(),
    MoodId.ATMOSPHERIC: frozenset(),
    MoodId.CHALLENGING: frozenset(),
    MoodId.STORY_RICH: frozenset({MoodId.ATMOSPHERIC, MoodId.NOSTALGIC, MoodId.SURREAL}),
    MoodId.COMPETITIVE: frozenset(),
    MoodId.SOCIAL: frozenset({MoodId.COMPETITIVE, MoodId.HIGH_ENERGY}),
    MoodId.EXPERIMENTAL: frozenset(),
    MoodId.MINDFUL: frozenset(),
    MoodId.NOSTALGIC: frozenset(),
    MoodId.GRITTY: frozenset(),
    MoodId.SURREAL: frozenset(),
    MoodId.ACTION_PACKED: frozenset({MoodId.INTENSE, MoodId.HIGH_ENERGY, MoodId.COMPETITIVE}),
}

MOOD_GENRE_WEIGHT_TABLE: Dict[MoodId, Dict[GenreId, int]] = {
    MoodId.INTENSE: {GenreId.ACTION: 30, GenreId.SHOOTER: 30, GenreId.ROGUELIKE: 25},
    MoodId.STRATEGIC: {GenreId.STRATEGY: 30, GenreId.PUZZLE: 25, GenreId.SIMULATION: 20},
    MoodId.RELAXING: {GenreId.CASUAL: 30, GenreId.SIMULATION: 25, GenreId.ADVENTURE: 20},
    MoodId.CREATIVE: {GenreId.SIMULATION: 30, GenreId.INDIE: 25},
    MoodId.HIGH_ENERGY: {},
    MoodId.ATMOSPHERIC: {},
    MoodId.CHALLENGING: {},
    MoodId.STORY_RICH: {GenreId.RPG: 30, GenreId.ADVENTURE: 30, GenreId.INDIE: 20},
    MoodId.COMPETITIVE: {GenreId.MULTIPLAYER: 30, GenreId.SPORTS: 25, GenreId.RACING: 25},
    MoodId.SOCIAL: {},
    MoodId.EXPERIMENTAL: {},
    MoodId.MINDFUL: {},
    MoodId.NOSTALGIC: {},
    MoodId.GRITTY: {},
    MoodId.SURREAL: {},
    MoodId.ACTION_PACKED: {},
}

MOOD_KEYWORD_TABLE: Dict[MoodId, Tuple[str, ...]] = {
    MoodId.INTENSE: ("fast", "hardcore", "combat", "survival", "brutal"),
    MoodId.STRATEGIC: ("tactical", "plan", "think", "turn-based", "logic"),
    MoodId.RELAXING: ("chill", "peaceful", "calm", "relax", "cozy"),
    MoodId.CREATIVE: (),
    MoodId.HIGH_ENERGY: (),
    MoodId.ATMOSPHERIC: ("immersive", "beautiful", "vibe", "scary", "dark"),
    MoodId.CHALLENGING: ("difficult", "mastery", "skill", "souls-like", "hard"),
    MoodId.STORY_RICH: ("narrative", "dialogue", "choices", "characters", "lore"),
    MoodId.COMPETITIVE: (),
    MoodId.SOCIAL: (),
    MoodId.EXPERIMENTAL: (),
    MoodId.MINDFUL: (),
    MoodId.NOSTALGIC: (),
    MoodId.GRITTY: (),
    MoodId.SURREAL: (),
    MoodId.ACTION_PACKED: (),
}


# =============================================================================
# Master moods (browse filtering only)
# =============================================================================

MASTER_MOOD_TABLE: Dict[MasterMoodId, FrozenSet[MoodId]] = {
    MasterMoodId.ADRENALINE: frozenset({
        MoodId.INTENSE, MoodId.COMPETITIVE, MoodId.HIGH_ENERGY, MoodId.ACTION_PACKED,
    }),
    MasterMoodId.BRAIN_POWER: frozenset({MoodId.STRATEGIC, MoodId.MINDFUL}),
    MasterMoodId.ZEN: frozenset({MoodId.RELAXING, MoodId.ATMOSPHERIC}),
    MasterMoodId.STORY: frozenset({MoodId.STORY_RICH, MoodId.ATMOSPHERIC}),
    MasterMoodId.SOCIAL: frozenset({MoodId.SOCIAL}),
    MasterMoodId.CREATIVE: frozenset({MoodId.CREATIVE}),
    MasterMoodId.NOSTALGIC: frozenset({MoodId.NOSTALGIC}),
    MasterMoodId.SCARY: frozenset({MoodId.GRITTY, MoodId.ATMOSPHERIC}),
}


# =============================================================================
# Table bundle
# =============================================================================

def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class TaxonomyTables:
    """Immutable bundle of every lookup table, validated on construction."""

    genre_index: Mapping[int, str] = field(default_factory=lambda: _freeze(GENRE_INDEX_TABLE))
    genre_aliases: Mapping[str, GenreId] = field(default_factory=lambda: _freeze(GENRE_ALIAS_TABLE))
    mood_aliases: Mapping[str, MoodId] = field(default_factory=lambda: _freeze(MOOD_ALIAS_TABLE))
    genre_moods: Mapping[GenreId, FrozenSet[MoodId]] = field(default_factory=lambda: _freeze(GENRE_MOOD_TABLE))
    mood_compatibility: Mapping[MoodId, FrozenSet[MoodId]] = field(
        default_factory=lambda: _freeze(MOOD_COMPATIBILITY_TABLE)
    )
    mood_genre_weights: Mapping[MoodId, Mapping[GenreId, int]] = field(
        default_factory=lambda: _freeze({m: _freeze(w) for m, w in MOOD_GENRE_WEIGHT_TABLE.items()})
    )
    mood_keywords: Mapping[MoodId, Tuple[str, ...]] = field(default_factory=lambda: _freeze(MOOD_KEYWORD_TABLE))
    master_moods: Mapping[MasterMoodId, FrozenSet[MoodId]] = field(
        default_factory=lambda: _freeze(MASTER_MOOD_TABLE)
    )

    def __post_init__(self):
        """Normalize alias keys, then validate every table."""
        object.__setattr__(
            self, "genre_aliases", _freeze({genre_key(k): v for k, v in self.genre_aliases.items()})
        )
        object.__setattr__(
            self, "mood_aliases", _freeze({mood_key(k): v for k, v in self.mood_aliases.items()})
        )
        validate_tables(self)


def _check_member(value: Any, enum_cls: Type[E], table: str) -> None:
    if not isinstance(value, enum_cls):
        raise TaxonomyConfigError(f"{table}: {value!r} is not a {enum_cls.__name__}")
    if getattr(value, "value", None) == "unknown":
        raise TaxonomyConfigError(f"{table}: 'unknown' cannot be used as a table entry")


def _check_exhaustive(keys: Iterable, required: Iterable, table: str) -> None:
    missing = sorted(str(k) for k in set(required) - set(keys))
    if missing:
        raise TaxonomyConfigError(f"{table}: missing entries for {', '.join(missing)}")


def validate_tables(tables: TaxonomyTables) -> None:
    """
    Check table integrity.

    Raises:
        TaxonomyConfigError: on any non-canonical id, missing required entry,
            negative weight or unresolvable genre index name
    """
    for name, genre in tables.genre_aliases.items():
        _check_member(genre, GenreId, "genre_aliases")
    for name, mood in tables.mood_aliases.items():
        _check_member(mood, MoodId, "mood_aliases")

    for index, name in tables.genre_index.items():
        if not isinstance(index, int) or isinstance(index, bool):
            raise TaxonomyConfigError(f"genre_index: key {index!r} is not an integer")
        key = genre_key(name)
        if key not in tables.genre_aliases and key not in {g.value for g in KNOWN_GENRES}:
            raise TaxonomyConfigError(f"genre_index: {index} -> {name!r} does not resolve to a genre")

    for genre, moods in tables.genre_moods.items():
        _check_member(genre, GenreId, "genre_moods")
        for mood in moods:
            _check_member(mood, MoodId, "genre_moods")
    _check_exhaustive(tables.genre_moods, KNOWN_GENRES, "genre_moods")

    for mood, compatible in tables.mood_compatibility.items():
        _check_member(mood, MoodId, "mood_compatibility")
        for other in compatible:
            _check_member(other, MoodId, "mood_compatibility")
    _check_exhaustive(tables.mood_compatibility, KNOWN_MOODS, "mood_compatibility")

    for mood, weights in tables.mood_genre_weights.items():
        _check_member(mood, MoodId, "mood_genre_weights")
        for genre, weight in weights.items():
            _check_member(genre, GenreId, "mood_genre_weights")
            if not isinstance(weight, int) or isinstance(weight, bool) or weight < 0:
                raise TaxonomyConfigError(
                    f"mood_genre_weights: {mood}/{genre} weight must be a non-negative int, got {weight!r}"
                )
    _check_exhaustive(tables.mood_genre_weights, KNOWN_MOODS, "mood_genre_weights")

    for mood, keywords in tables.mood_keywords.items():
        _check_member(mood, MoodId, "mood_keywords")
        for word in keywords:
            if not isinstance(word, str) or not word.strip() or word != word.lower():
                raise TaxonomyConfigError(f"mood_keywords: {mood} keyword {word!r} must be non-empty lowercase text")
    _check_exhaustive(tables.mood_keywords, KNOWN_MOODS, "mood_keywords")

    for master, moods in tables.master_moods.items():
        _check_member(master, MasterMoodId, "master_moods")
        if not moods:
            raise TaxonomyConfigError(f"master_moods: {master} must map to at least one mood")
        for mood in moods:
            _check_member(mood, MoodId, "master_moods")
    _check_exhaustive(tables.master_moods, MasterMoodId, "master_moods")


# =============================================================================
# Overrides (from YAML configuration)
# =============================================================================

def _parse_member(raw: Any, enum_cls: Type[E], table: str, key_fn: Callable[[Any], str]) -> E:
    if isinstance(raw, enum_cls):
        member = raw
    else:
        try:
            member = enum_cls(key_fn(raw))
        except ValueError:
            raise TaxonomyConfigError(f"{table}: {raw!r} is not a canonical {enum_cls.__name__}") from None
    _check_member(member, enum_cls, table)
    return member


def _as_mapping(raw: Any, table: str) -> Mapping:
    if not isinstance(raw, Mapping):
        raise TaxonomyConfigError(f"{table}: expected a mapping, got {type(raw).__name__}")
    return raw


def _as_sequence(raw: Any, table: str, key: Any) -> Tuple[Any, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise TaxonomyConfigError(f"{table}: {key} expected a list, got {type(raw).__name__}")
    return tuple(raw)


def tables_from_overrides(overrides: Optional[Mapping[str, Any]], base: Optional[TaxonomyTables] = None) -> TaxonomyTables:
    """
    Build tables from the defaults plus raw (string-keyed) overrides.

    Each override entry replaces the base entry with the same key. Values are
    parsed strictly: any id outside the canonical vocabulary is a
    TaxonomyConfigError, never silently dropped.

    Args:
        overrides: Mapping shaped like the `taxonomy` config section
        base: Tables to merge over (defaults when None)

    Returns:
        New validated TaxonomyTables
    """
    base = base or DEFAULT_TABLES
    if not overrides:
        return base

    unknown_sections = set(overrides) - _OVERRIDE_SECTIONS
    if unknown_sections:
        raise TaxonomyConfigError(f"Unknown taxonomy tables: {', '.join(sorted(unknown_sections))}")

    genre_index = dict(base.genre_index)
    for index, name in _as_mapping(overrides.get("genre_index", {}), "genre_index").items():
        try:
            genre_index[int(index)] = str(name)
        except (TypeError, ValueError):
            raise TaxonomyConfigError(f"genre_index: key {index!r} is not an integer") from None

    genre_aliases = dict(base.genre_aliases)
    for name, genre in _as_mapping(overrides.get("genre_aliases", {}), "genre_aliases").items():
        genre_aliases[str(name)] = _parse_member(genre, GenreId, "genre_aliases", genre_key)

    mood_aliases = dict(base.mood_aliases)
    for name, mood in _as_mapping(overrides.get("mood_aliases", {}), "mood_aliases").items():
        mood_aliases[str(name)] = _parse_member(mood, MoodId, "mood_aliases", mood_key)

    genre_moods = dict(base.genre_moods)
    for genre, moods in _as_mapping(overrides.get("genre_moods", {}), "genre_moods").items():
        genre_moods[_parse_member(genre, GenreId, "genre_moods", genre_key)] = frozenset(
            _parse_member(m, MoodId, "genre_moods", mood_key)
            for m in _as_sequence(moods, "genre_moods", genre)
        )

    compatibility = dict(base.mood_compatibility)
    for mood, others in _as_mapping(overrides.get("mood_compatibility", {}), "mood_compatibility").items():
        compatibility[_parse_member(mood, MoodId, "mood_compatibility", mood_key)] = frozenset(
            _parse_member(m, MoodId, "mood_compatibility", mood_key)
            for m in _as_sequence(others, "mood_compatibility", mood)
        )

    genre_weights = dict(base.mood_genre_weights)
    for mood, weights in _as_mapping(overrides.get("mood_genre_weights", {}), "mood_genre_weights").items():
        genre_weights[_parse_member(mood, MoodId, "mood_genre_weights", mood_key)] = _freeze({
            _parse_member(g, GenreId, "mood_genre_weights", genre_key): w
            for g, w in _as_mapping(weights or {}, "mood_genre_weights").items()
        })

    keywords = dict(base.mood_keywords)
    for mood, words in _as_mapping(overrides.get("mood_keywords", {}), "mood_keywords").items():
        # A bare string would otherwise split into single-letter keywords
        keywords[_parse_member(mood, MoodId, "mood_keywords", mood_key)] = _as_sequence(
            words, "mood_keywords", mood
        )

    master_moods = dict(base.master_moods)
    for master, moods in _as_mapping(overrides.get("master_moods", {}), "master_moods").items():
        master_moods[_parse_member(master, MasterMoodId, "master_moods", mood_key)] = frozenset(
            _parse_member(m, MoodId, "master_moods", mood_key)
            for m in _as_sequence(moods, "master_moods", master)
        )

    tables = TaxonomyTables(
        genre_index=_freeze(genre_index),
        genre_aliases=genre_aliases,
        mood_aliases=mood_aliases,
        genre_moods=_freeze(genre_moods),
        mood_compatibility=_freeze(compatibility),
        mood_genre_weights=_freeze(genre_weights),
        mood_keywords=_freeze(keywords),
        master_moods=_freeze(master_moods),
    )
    logger.info(f"Taxonomy tables loaded with overrides for: {', '.join(sorted(overrides))}")
    return tables


_OVERRIDE_SECTIONS = frozenset({
    "genre_index",
    "genre_aliases",
    "mood_aliases",
    "genre_moods",
    "mood_compatibility",
    "mood_genre_weights",
    "mood_keywords",
    "master_moods",
})

# Built (and validated) once at import
DEFAULT_TABLES = TaxonomyTables()

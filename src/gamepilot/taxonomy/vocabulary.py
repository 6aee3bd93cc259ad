"""
Taxonomy Vocabulary
===================
Canonical identifiers every downstream component operates on.

Enumerations:
- GenreId: canonical game genres
- MoodId: canonical play moods
- MasterMoodId: coarse browse groupings (filtering only, never scoring)

Both GenreId and MoodId carry an UNKNOWN member. Normalization resolves
anything it cannot place to UNKNOWN instead of raising.
"""

from enum import Enum
from typing import FrozenSet


class GenreId(str, Enum):
    """Canonical game genre."""
    ACTION = "action"
    ADVENTURE = "adventure"
    RPG = "rpg"
    STRATEGY = "strategy"
    SIMULATION = "simulation"
    SPORTS = "sports"
    RACING = "racing"
    INDIE = "indie"
    CASUAL = "casual"
    SHOOTER = "shooter"
    HORROR = "horror"
    PUZZLE = "puzzle"
    PLATFORMER = "platformer"
    MOBA = "moba"
    ROGUELIKE = "roguelike"
    MULTIPLAYER = "multiplayer"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class MoodId(str, Enum):
    """Canonical play mood."""
    INTENSE = "intense"
    STRATEGIC = "strategic"
    RELAXING = "relaxing"
    CREATIVE = "creative"
    HIGH_ENERGY = "high-energy"
    ATMOSPHERIC = "atmospheric"
    CHALLENGING = "challenging"
    STORY_RICH = "story-rich"
    COMPETITIVE = "competitive"
    SOCIAL = "social"
    EXPERIMENTAL = "experimental"
    MINDFUL = "mindful"
    NOSTALGIC = "nostalgic"
    GRITTY = "gritty"
    SURREAL = "surreal"
    ACTION_PACKED = "action-packed"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class MasterMoodId(str, Enum):
    """User-facing mood grouping used by the library browser."""
    ADRENALINE = "adrenaline"
    BRAIN_POWER = "brain-power"
    ZEN = "zen"
    STORY = "story"
    SOCIAL = "social"
    CREATIVE = "creative"
    NOSTALGIC = "nostalgic"
    SCARY = "scary"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Derived vocabularies
# =============================================================================

# Members that scoring tables must cover (UNKNOWN is terminal, never keyed)
KNOWN_GENRES: FrozenSet[GenreId] = frozenset(g for g in GenreId if g is not GenreId.UNKNOWN)
KNOWN_MOODS: FrozenSet[MoodId] = frozenset(m for m in MoodId if m is not MoodId.UNKNOWN)

GENRE_VALUES: FrozenSet[str] = frozenset(g.value for g in GenreId)
MOOD_VALUES: FrozenSet[str] = frozenset(m.value for m in MoodId)
MASTER_MOOD_VALUES: FrozenSet[str] = frozenset(m.value for m in MasterMoodId)


def mood_sort_key(mood: MoodId) -> int:
    """Position of a mood in declaration order, for stable display ordering."""
    return _MOOD_ORDER[mood]


_MOOD_ORDER = {mood: idx for idx, mood in enumerate(MoodId)}

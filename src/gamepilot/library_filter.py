"""
Library browse filter.

Master moods are coarse user-facing groupings ("adrenaline", "zen", ...) over
the canonical moods. A game matches a master mood when any of its moods is
one of the master mood's sub-moods, or when one of its moods literally carries
the master mood's id (e.g. "social").
"""
from __future__ import annotations

from typing import AbstractSet, Callable, Dict, Iterable, List, Optional, Union

from .records import GameRecord
from .string_utils import mood_key, normalize_text
from .taxonomy import DEFAULT_TABLES, MasterMoodId, MoodId, TaxonomyTables, normalize_master_mood

MasterMoodLike = Union[MasterMoodId, str]
MoodResolver = Callable[[GameRecord], AbstractSet[MoodId]]


def _explicit_moods(game: GameRecord) -> AbstractSet[MoodId]:
    return game.moods


def matches_master_mood(
    game: GameRecord,
    master_mood: MasterMoodLike,
    moods: Optional[AbstractSet[MoodId]] = None,
    tables: Optional[TaxonomyTables] = None,
) -> bool:
    """
    True when the game belongs under master_mood.

    Args:
        game: Canonical game record
        master_mood: MasterMoodId or its string id; an unrecognised id can
            only match literally
        moods: Effective moods to test (defaults to the record's explicit moods)
        tables: Taxonomy tables (defaults when None)
    """
    effective = game.moods if moods is None else moods
    if not effective:
        return False

    master = normalize_master_mood(master_mood)
    literal = master.value if master is not None else mood_key(str(master_mood))
    if any(mood.value == literal for mood in effective):
        return True
    if master is None:
        return False

    sub_moods = (tables or DEFAULT_TABLES).master_moods.get(master, frozenset())
    return not sub_moods.isdisjoint(effective)


def filter_by_master_mood(
    games: Iterable[GameRecord],
    master_mood: MasterMoodLike,
    mood_resolver: Optional[MoodResolver] = None,
    tables: Optional[TaxonomyTables] = None,
) -> List[GameRecord]:
    """Games under master_mood, in input order."""
    resolve = mood_resolver or _explicit_moods
    return [game for game in games if matches_master_mood(game, master_mood, resolve(game), tables)]


def count_by_master_mood(
    games: Iterable[GameRecord],
    mood_resolver: Optional[MoodResolver] = None,
    tables: Optional[TaxonomyTables] = None,
) -> Dict[MasterMoodId, int]:
    """Number of games under each master mood. A game may count toward several."""
    resolve = mood_resolver or _explicit_moods
    counts = {master: 0 for master in MasterMoodId}
    for game in games:
        moods = resolve(game)
        for master in MasterMoodId:
            if matches_master_mood(game, master, moods, tables):
                counts[master] += 1
    return counts


def filter_by_title(games: Iterable[GameRecord], term: Optional[str]) -> List[GameRecord]:
    """Case-insensitive substring search on titles; an empty term keeps everything."""
    needle = normalize_text(term)
    games = list(games)
    if not needle:
        return games
    return [game for game in games if needle in normalize_text(game.title)]

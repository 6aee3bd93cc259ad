"""
Mood Inference
==============

Derives candidate moods for games that carry no explicit mood tags, by
unioning the static genre -> moods table over the game's genres.

Usage:
    engine = MoodInferenceEngine(tables=DEFAULT_TABLES, cache=MoodInferenceCache())
    moods = engine.moods_for(game)

    # After a taxonomy table update
    engine.cache.clear()

The cache is a pure performance layer: a cached entry stores the genre tuple
and the genre -> moods table it was computed from, and only counts as a hit
when both still match. Results are identical with a cold or warm cache, also
when one cache is shared by engines built on different tables.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from .records import GameRecord
from .taxonomy import DEFAULT_TABLES, GenreId, MoodId, TaxonomyTables

logger = logging.getLogger(__name__)

GenreKey = Tuple[GenreId, ...]
MoodSource = Optional[Mapping[GenreId, Any]]


def infer_moods(genres: Iterable[GenreId], tables: Optional[TaxonomyTables] = None) -> FrozenSet[MoodId]:
    """
    Union of the moods implied by each genre.

    Genres missing from the table (including UNKNOWN) contribute nothing; no
    genres infers the empty set, which scoring treats as neutral.
    """
    genre_moods = (tables or DEFAULT_TABLES).genre_moods
    moods = set()
    for genre in genres:
        moods.update(genre_moods.get(genre, ()))
    return frozenset(moods)


class MoodInferenceCache:
    """Inferred moods per game id, validated against the genres they came from.

    Cache Key:
        The game id. Each entry also stores the genre tuple and the
        genre -> moods table (by identity) used for the computation; a lookup
        with a different genre tuple or table is a miss.

    Concurrency:
        insert() and clear() are serialised by a lock. clear() swaps in a new
        dict, so a reader that already fetched the old mapping keeps a
        consistent view and never observes a half-cleared cache.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[GenreKey, MoodSource, FrozenSet[MoodId]]] = {}
        self._lock = threading.Lock()
        self._hits: int = 0
        self._misses: int = 0

    def get(self, game_id: str, genres: GenreKey, source: MoodSource = None) -> Optional[FrozenSet[MoodId]]:
        """Return cached moods for game_id, or None when absent or computed from other genres or tables."""
        entries = self._entries
        entry = entries.get(game_id)
        if entry is None or entry[0] != tuple(genres) or entry[1] is not source:
            self._misses += 1
            return None
        self._hits += 1
        return entry[2]

    def insert(
        self,
        game_id: str,
        genres: GenreKey,
        moods: FrozenSet[MoodId],
        source: MoodSource = None,
    ) -> None:
        """Store moods computed from the given genre tuple and table, replacing any stale entry."""
        with self._lock:
            self._entries[game_id] = (tuple(genres), source, frozenset(moods))

    def invalidate(self, game_id: str) -> None:
        """Drop one entry (e.g. the game's genres changed in the store)."""
        with self._lock:
            entries = dict(self._entries)
            entries.pop(game_id, None)
            self._entries = entries

    def clear(self) -> None:
        """Drop every entry atomically."""
        with self._lock:
            dropped = len(self._entries)
            self._entries = {}
            self._hits = 0
            self._misses = 0
        logger.debug(f"Mood inference cache cleared ({dropped} entries)")

    def size(self) -> int:
        return len(self._entries)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._entries

    def stats(self) -> Dict[str, float]:
        """Hit/miss counters and hit rate."""
        total = self._hits + self._misses
        return {
            "size": self.size(),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": (self._hits / total) if total else 0.0,
        }


class MoodInferenceEngine:
    """Resolves the effective mood set of a game.

    Explicit moods always win and never touch the cache. Otherwise moods are
    inferred from genres, going through the injected cache.
    """

    def __init__(self, tables: Optional[TaxonomyTables] = None, cache: Optional[MoodInferenceCache] = None):
        self.tables = tables or DEFAULT_TABLES
        self.cache = cache if cache is not None else MoodInferenceCache()

    def moods_for(self, game: GameRecord) -> FrozenSet[MoodId]:
        if game.moods:
            return game.moods

        source = self.tables.genre_moods
        cached = self.cache.get(game.id, game.genres, source)
        if cached is not None:
            return cached

        moods = infer_moods(game.genres, self.tables)
        self.cache.insert(game.id, game.genres, moods, source)
        if moods:
            logger.debug(f"Inferred moods for {game.title or game.id!r}: {sorted(m.value for m in moods)}")
        return moods

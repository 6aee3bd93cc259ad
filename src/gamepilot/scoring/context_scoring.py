"""
Context Scoring
===============

Scores a game against a UserContext as the sum of four independent,
non-negative sub-scores:

    mood_match        (max 40)  exact mood / compatible mood / baseline
    genre_fit         (max 30)  best genre weight for the target mood
    time_alignment    (max 20)  session bucket match / baseline
    description_match (max 10)  distinct mood keywords in title + description

Missing optional fields degrade to the documented baseline of the affected
sub-score. Nothing in this module raises for a sparse record.
"""

from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

from ..records import GameRecord, UserContext
from ..string_utils import normalize_text
from ..taxonomy import DEFAULT_TABLES, GenreId, MoodId, TaxonomyTables
from .constraints import ScoringWeights
from .results import RecommendationScore, ScoreBreakdown

DEFAULT_WEIGHTS = ScoringWeights()


def score_mood_match(
    moods: AbstractSet[MoodId],
    ctx: UserContext,
    tables: Optional[TaxonomyTables] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Exact target mood scores max; a compatible mood scores the secondary weight."""
    if ctx.mood is None:
        return weights.mood_baseline
    if ctx.mood in moods:
        return weights.mood_exact
    compatible = (tables or DEFAULT_TABLES).mood_compatibility.get(ctx.mood, frozenset())
    if not compatible.isdisjoint(moods):
        return weights.mood_compatible
    return weights.mood_baseline


def score_genre_fit(
    genres: Sequence[GenreId],
    ctx: UserContext,
    tables: Optional[TaxonomyTables] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Best (max, not sum) genre weight for the target mood; the preferred genre scores the ceiling."""
    if ctx.preferred_genre is not None and ctx.preferred_genre in genres:
        return weights.genre_fit_max
    if not genres or ctx.mood is None:
        return weights.genre_fit_default

    preferences = (tables or DEFAULT_TABLES).mood_genre_weights.get(ctx.mood, {})
    best = max(preferences.get(genre, weights.genre_fit_default) for genre in genres)
    return min(best, weights.genre_fit_max)


def score_time_alignment(
    game: GameRecord,
    ctx: UserContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Session bucket match scores max; mismatch or unknown length scores the baseline."""
    bucket = game.session_bucket
    if bucket is not None and bucket == ctx.session:
        return weights.time_match
    return weights.time_baseline


def score_description_match(
    game: GameRecord,
    ctx: UserContext,
    tables: Optional[TaxonomyTables] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Fixed increment per distinct keyword found in title + description, capped."""
    if ctx.mood is None:
        return 0
    keywords = (tables or DEFAULT_TABLES).mood_keywords.get(ctx.mood, ())
    if not keywords:
        return 0
    text = f"{normalize_text(game.title)} {normalize_text(game.description)}"
    hits = sum(1 for keyword in set(keywords) if keyword in text)
    return min(hits * weights.keyword_increment, weights.description_max)


def score_game(
    game: GameRecord,
    moods: AbstractSet[MoodId],
    ctx: UserContext,
    tables: Optional[TaxonomyTables] = None,
    weights: Optional[ScoringWeights] = None,
) -> RecommendationScore:
    """
    Score one game against a context.

    Args:
        game: Canonical game record
        moods: Effective moods (explicit, or inferred when the record has none)
        ctx: User context
        tables: Taxonomy tables (defaults when None)
        weights: Scoring weights (defaults when None)

    Returns:
        RecommendationScore without reasoning attached
    """
    weights = weights or DEFAULT_WEIGHTS
    breakdown = ScoreBreakdown(
        mood_match=score_mood_match(moods, ctx, tables, weights),
        genre_fit=score_genre_fit(game.genres, ctx, tables, weights),
        time_alignment=score_time_alignment(game, ctx, weights),
        description_match=score_description_match(game, ctx, tables, weights),
    )
    return RecommendationScore(
        game_id=game.id,
        total_score=breakdown.total,
        breakdown=breakdown,
    )

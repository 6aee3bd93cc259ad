"""
Ranking for scored libraries.

Ordering is by total score, descending. Ties keep input order (stable sort);
there is deliberately no secondary key.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..mood_inference import MoodInferenceEngine
from ..records import GameRecord, UserContext
from ..taxonomy import TaxonomyTables
from .constraints import ScoringWeights
from .context_scoring import score_game
from .results import RecommendationScore

logger = logging.getLogger(__name__)


def rank_order(totals: Sequence[float]) -> np.ndarray:
    """Indices that sort totals descending, ties in input order."""
    if len(totals) == 0:
        return np.array([], dtype=np.intp)
    arr = np.asarray(totals, dtype=np.float64)
    # Negating keeps the stable sort ascending while ordering scores descending
    return np.argsort(-arr, kind="stable")


def rank_scores(scores: Sequence[RecommendationScore]) -> List[RecommendationScore]:
    """Sort scores by total descending, preserving input order for ties."""
    order = rank_order([s.total_score for s in scores])
    return [scores[i] for i in order]


def score_library(
    games: Sequence[GameRecord],
    ctx: UserContext,
    engine: MoodInferenceEngine,
    *,
    tables: Optional[TaxonomyTables] = None,
    weights: Optional[ScoringWeights] = None,
) -> List[Tuple[GameRecord, RecommendationScore]]:
    """
    Score every game and return (game, score) pairs ranked best first.

    Args:
        games: Canonical game records
        ctx: User context
        engine: Mood inference engine supplying effective moods
        tables: Taxonomy tables (defaults to the engine's tables)
        weights: Scoring weights

    Returns:
        Ranked list of (game, score)
    """
    if not games:
        return []
    tables = tables or engine.tables
    scores = [score_game(game, engine.moods_for(game), ctx, tables, weights) for game in games]
    order = rank_order([s.total_score for s in scores])
    ranked = [(games[i], scores[i]) for i in order]
    logger.debug(
        f"Scored {len(games)} games for mood={ctx.mood.value if ctx.mood else 'neutral'} "
        f"session={ctx.session.value}; top={ranked[0][1].total_score}"
    )
    return ranked

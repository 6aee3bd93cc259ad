"""
Scoring Module for Context Recommendations
==========================================

Public API:
-----------
Context scoring:
    score_game()
    score_mood_match()
    score_genre_fit()
    score_time_alignment()
    score_description_match()

Ranking:
    rank_scores()
    rank_order()
    score_library()

Weights and results:
    ScoringWeights
    check_weights_against_tables()
    RecommendationScore
    ScoreBreakdown
    Reasoning
    ConfidenceTier
"""

from .constraints import (
    ScoringWeights,
    check_weights_against_tables,
)
from .context_scoring import (
    DEFAULT_WEIGHTS,
    score_description_match,
    score_game,
    score_genre_fit,
    score_mood_match,
    score_time_alignment,
)
from .ranking import (
    rank_order,
    rank_scores,
    score_library,
)
from .results import (
    ConfidenceTier,
    Reasoning,
    RecommendationScore,
    ScoreBreakdown,
)

__all__ = [
    # Context scoring
    "score_game",
    "score_mood_match",
    "score_genre_fit",
    "score_time_alignment",
    "score_description_match",
    "DEFAULT_WEIGHTS",
    # Ranking
    "rank_order",
    "rank_scores",
    "score_library",
    # Weights
    "ScoringWeights",
    "check_weights_against_tables",
    # Results
    "RecommendationScore",
    "ScoreBreakdown",
    "Reasoning",
    "ConfidenceTier",
]

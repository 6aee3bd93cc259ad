"""Unit tests for ranking scored libraries."""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from gamepilot.mood_inference import MoodInferenceEngine
from gamepilot.records import GameRecord, SessionBucket, UserContext
from gamepilot.scoring import rank_order, rank_scores, score_library
from gamepilot.scoring.results import RecommendationScore, ScoreBreakdown
from gamepilot.taxonomy import GenreId, MoodId


def _score(game_id, total):
    breakdown = ScoreBreakdown(mood_match=total, genre_fit=0, time_alignment=0, description_match=0)
    return RecommendationScore(game_id=game_id, total_score=total, breakdown=breakdown)


class TestRankOrder:
    """Descending order with stable ties."""

    def test_descending(self):
        assert list(rank_order([10, 30, 20])) == [1, 2, 0]

    def test_ties_keep_input_order(self):
        assert list(rank_order([50, 70, 50, 70, 50])) == [1, 3, 0, 2, 4]

    def test_empty(self):
        order = rank_order([])
        assert isinstance(order, np.ndarray)
        assert order.size == 0

    def test_rank_scores(self):
        ranked = rank_scores([_score("a", 40), _score("b", 60), _score("c", 40)])
        assert [s.game_id for s in ranked] == ["b", "a", "c"]


class TestScoreLibrary:
    """Scoring and ranking a whole library."""

    def test_empty_library(self):
        assert score_library([], UserContext(), MoodInferenceEngine()) == []

    def test_exact_match_ranks_first_regardless_of_input_order(self):
        compat = GameRecord(id="compat", genres=(GenreId.ACTION,), moods=frozenset({MoodId.ACTION_PACKED}))
        exact = GameRecord(id="exact", genres=(GenreId.ACTION,), moods=frozenset({MoodId.INTENSE}))
        ctx = UserContext(mood=MoodId.INTENSE)
        for games in ([compat, exact], [exact, compat]):
            ranked = score_library(games, ctx, MoodInferenceEngine())
            assert ranked[0][0].id == "exact"

    def test_identical_games_keep_input_order(self):
        games = [GameRecord(id=str(i), genres=(GenreId.PUZZLE,)) for i in range(6)]
        ranked = score_library(games, UserContext(mood=MoodId.STRATEGIC), MoodInferenceEngine())
        assert [g.id for g, _ in ranked] == [str(i) for i in range(6)]

    def test_pairs_line_up(self):
        games = [
            GameRecord(id="long", estimated_session_minutes=180),
            GameRecord(id="short", estimated_session_minutes=10),
        ]
        ranked = score_library(games, UserContext(session=SessionBucket.SHORT), MoodInferenceEngine())
        assert [(g.id, s.game_id) for g, s in ranked] == [("short", "short"), ("long", "long")]
        assert ranked[0][1].breakdown.time_alignment == 20

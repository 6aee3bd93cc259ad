"""Unit tests for the reasoning generator."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from gamepilot.reasoning import (
    DEFAULT_MOOD_ALIGNMENT,
    MOOD_ALIGNMENT_BY_MOOD,
    PRIMARY_BY_CONFIDENCE,
    TIME_FIT_BY_BUCKET,
    attach_reasoning,
    confidence_for,
    explain,
    validate_phrase_tables,
)
from gamepilot.records import SessionBucket, UserContext
from gamepilot.scoring import ConfidenceTier
from gamepilot.scoring.results import RecommendationScore, ScoreBreakdown
from gamepilot.taxonomy import KNOWN_MOODS, MoodId, TaxonomyConfigError


def _score(total):
    breakdown = ScoreBreakdown(mood_match=total, genre_fit=0, time_alignment=0, description_match=0)
    return RecommendationScore(game_id="g", total_score=total, breakdown=breakdown)


class TestConfidence:
    """Tier thresholds."""

    @pytest.mark.parametrize("total,tier", [
        (100, ConfidenceTier.HIGH),
        (75, ConfidenceTier.HIGH),
        (74, ConfidenceTier.MEDIUM),
        (45, ConfidenceTier.MEDIUM),
        (44, ConfidenceTier.LOW),
        (25, ConfidenceTier.LOW),
        (0, ConfidenceTier.LOW),
    ])
    def test_thresholds(self, total, tier):
        assert confidence_for(total) is tier


class TestExplain:
    """Phrase selection."""

    def test_high_confidence(self):
        ctx = UserContext(mood=MoodId.INTENSE, session=SessionBucket.SHORT)
        reasoning = explain(_score(90), ctx)
        assert reasoning.confidence is ConfidenceTier.HIGH
        assert reasoning.primary == PRIMARY_BY_CONFIDENCE[ConfidenceTier.HIGH]
        assert reasoning.mood_alignment == MOOD_ALIGNMENT_BY_MOOD[MoodId.INTENSE]
        assert reasoning.time_fit == TIME_FIT_BY_BUCKET[SessionBucket.SHORT]
        assert reasoning.secondary == (reasoning.mood_alignment, reasoning.time_fit)

    def test_neutral_context_uses_default_alignment(self):
        reasoning = explain(_score(25), UserContext())
        assert reasoning.confidence is ConfidenceTier.LOW
        assert reasoning.mood_alignment == DEFAULT_MOOD_ALIGNMENT
        assert reasoning.time_fit == TIME_FIT_BY_BUCKET[SessionBucket.MEDIUM]

    def test_every_mood_has_a_phrase(self):
        assert set(MOOD_ALIGNMENT_BY_MOOD) == set(KNOWN_MOODS)
        assert len(set(MOOD_ALIGNMENT_BY_MOOD.values())) == len(KNOWN_MOODS)

    def test_missing_phrases_rejected(self):
        validate_phrase_tables()
        partial = {m: p for m, p in MOOD_ALIGNMENT_BY_MOOD.items() if m is not MoodId.SURREAL}
        with pytest.raises(TaxonomyConfigError, match="surreal"):
            validate_phrase_tables(mood_phrases=partial)
        with pytest.raises(TaxonomyConfigError, match="long"):
            validate_phrase_tables(time_phrases={SessionBucket.SHORT: "a", SessionBucket.MEDIUM: "b"})

    def test_attach_keeps_numbers(self):
        score = _score(60)
        explained = attach_reasoning(score, UserContext(mood=MoodId.SOCIAL))
        assert explained.total_score == score.total_score
        assert explained.breakdown == score.breakdown
        assert explained.reasoning.confidence is ConfidenceTier.MEDIUM
        assert score.reasoning is None

    def test_to_dict(self):
        explained = attach_reasoning(_score(80), UserContext(mood=MoodId.RELAXING, session=SessionBucket.LONG))
        data = explained.to_dict()
        assert data["total_score"] == 80
        assert data["breakdown"]["mood_match"] == 80
        assert data["reasoning"]["confidence"] == "high"
        assert data["reasoning"]["secondary"] == [
            MOOD_ALIGNMENT_BY_MOOD[MoodId.RELAXING],
            TIME_FIT_BY_BUCKET[SessionBucket.LONG],
        ]

"""
Reasoning generator.

Turns a numeric score into a confidence tier and display phrases. Output is
informational only: explaining a score never changes its numbers or its rank.
"""
from __future__ import annotations

import dataclasses
from typing import Dict, Mapping, Optional

from .records import SessionBucket, UserContext
from .scoring.results import ConfidenceTier, Reasoning, RecommendationScore
from .taxonomy import KNOWN_MOODS, MoodId, TaxonomyConfigError

HIGH_CONFIDENCE_MIN = 75
MEDIUM_CONFIDENCE_MIN = 45

PRIMARY_BY_CONFIDENCE: Dict[ConfidenceTier, str] = {
    ConfidenceTier.HIGH: "Perfect match for your current mood",
    ConfidenceTier.MEDIUM: "Good fit for how you're feeling",
    ConfidenceTier.LOW: "Worth considering for today",
}

MOOD_ALIGNMENT_BY_MOOD: Dict[MoodId, str] = {
    MoodId.INTENSE: "High-stakes action to get your heart racing",
    MoodId.STRATEGIC: "Deep tactical gameplay for your analytical side",
    MoodId.RELAXING: "A peaceful escape to help you unwind",
    MoodId.CREATIVE: "Tools and worlds to express your imagination",
    MoodId.HIGH_ENERGY: "Fast-paced excitement and adrenaline",
    MoodId.ATMOSPHERIC: "Immersive worlds with incredible vibes",
    MoodId.CHALLENGING: "A rewarding test of your genuine skill",
    MoodId.STORY_RICH: "A deep narrative that will stick with you",
    MoodId.COMPETITIVE: "Sharpen your edge against the competition",
    MoodId.SOCIAL: "Great for connecting and playing together",
    MoodId.EXPERIMENTAL: "Something unique and outside the box",
    MoodId.MINDFUL: "Thoughtful gameplay for a focused state",
    MoodId.NOSTALGIC: "Classic feels and timeless charm",
    MoodId.GRITTY: "Raw, grounded and uncompromising",
    MoodId.SURREAL: "A trip through the weird and wonderful",
    MoodId.ACTION_PACKED: "Non-stop thrills from start to finish",
}

# Neutral context or a mood without its own phrase
DEFAULT_MOOD_ALIGNMENT = "Solid match for your current vibe"

TIME_FIT_BY_BUCKET: Dict[SessionBucket, str] = {
    SessionBucket.SHORT: "Perfect for a quick gaming window",
    SessionBucket.MEDIUM: "Great for a focused session where you still make progress",
    SessionBucket.LONG: "Ideal for a longer, more immersive session",
}

def validate_phrase_tables(
    mood_phrases: Mapping[MoodId, str] = MOOD_ALIGNMENT_BY_MOOD,
    time_phrases: Mapping[SessionBucket, str] = TIME_FIT_BY_BUCKET,
) -> None:
    """
    Check that every mood and every session bucket has a phrase.

    Raises:
        TaxonomyConfigError: naming the uncovered entries
    """
    missing_moods = sorted(m.value for m in set(KNOWN_MOODS) - set(mood_phrases))
    if missing_moods:
        raise TaxonomyConfigError(f"mood alignment phrases: missing entries for {', '.join(missing_moods)}")
    missing_buckets = sorted(b.value for b in set(SessionBucket) - set(time_phrases))
    if missing_buckets:
        raise TaxonomyConfigError(f"time fit phrases: missing entries for {', '.join(missing_buckets)}")


validate_phrase_tables()


def confidence_for(total_score: int) -> ConfidenceTier:
    """total >= 75 is high, >= 45 medium, anything lower is low."""
    if total_score >= HIGH_CONFIDENCE_MIN:
        return ConfidenceTier.HIGH
    if total_score >= MEDIUM_CONFIDENCE_MIN:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW


def mood_alignment_phrase(mood: Optional[MoodId]) -> str:
    if mood is None:
        return DEFAULT_MOOD_ALIGNMENT
    return MOOD_ALIGNMENT_BY_MOOD.get(mood, DEFAULT_MOOD_ALIGNMENT)


def explain(score: RecommendationScore, ctx: UserContext) -> Reasoning:
    """Build the reasoning for a score under the given context."""
    confidence = confidence_for(score.total_score)
    mood_alignment = mood_alignment_phrase(ctx.mood)
    time_fit = TIME_FIT_BY_BUCKET[ctx.session]
    return Reasoning(
        primary=PRIMARY_BY_CONFIDENCE[confidence],
        secondary=(mood_alignment, time_fit),
        confidence=confidence,
        mood_alignment=mood_alignment,
        time_fit=time_fit,
    )


def attach_reasoning(score: RecommendationScore, ctx: UserContext) -> RecommendationScore:
    """Copy of score with reasoning set; numbers are untouched."""
    return dataclasses.replace(score, reasoning=explain(score, ctx))

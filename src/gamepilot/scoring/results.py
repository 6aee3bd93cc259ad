"""Result types produced by scoring and reasoning."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ConfidenceTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Reasoning:
    """
    Human-readable justification for a score.

    Attributes:
        primary: Phrase chosen by confidence tier
        secondary: Ordered supporting phrases (mood alignment, time fit)
        confidence: Confidence tier
        mood_alignment: Phrase for the context mood
        time_fit: Phrase for the session bucket
    """
    primary: str
    secondary: Tuple[str, ...]
    confidence: ConfidenceTier
    mood_alignment: str
    time_fit: str


@dataclass(frozen=True)
class ScoreBreakdown:
    mood_match: int
    genre_fit: int
    time_alignment: int
    description_match: int

    @property
    def total(self) -> int:
        return self.mood_match + self.genre_fit + self.time_alignment + self.description_match


@dataclass(frozen=True)
class RecommendationScore:
    """Score of one game against one context. reasoning is None until explained."""
    game_id: str
    total_score: int
    breakdown: ScoreBreakdown
    reasoning: Optional[Reasoning] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.reasoning is not None:
            data["reasoning"]["confidence"] = self.reasoning.confidence.value
            data["reasoning"]["secondary"] = list(self.reasoning.secondary)
        return data

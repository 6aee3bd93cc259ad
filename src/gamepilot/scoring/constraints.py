"""
Scoring Weights
===============

Point values for the four additive sub-scores. Defaults reproduce the
hand-tuned values: mood 40/25/5, genre 30/10, time 20/10, description 3 per
keyword capped at 10.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..taxonomy import TaxonomyConfigError, TaxonomyTables


@dataclass(frozen=True)
class ScoringWeights:
    """Weights for context scoring."""

    mood_exact: int = 40
    """Game moods contain the target mood."""

    mood_compatible: int = 25
    """Game moods contain a mood compatible with the target."""

    mood_baseline: int = 5
    """No mood overlap, or neutral context."""

    genre_fit_max: int = 30
    """Ceiling for genre fit (also awarded for the preferred genre)."""

    genre_fit_default: int = 10
    """Genre absent from the target mood's table, or no genres."""

    time_match: int = 20
    """Session bucket matches the context."""

    time_baseline: int = 10
    """Bucket mismatch or unknown session length."""

    keyword_increment: int = 3
    """Points per distinct description keyword hit."""

    description_max: int = 10
    """Cap for description keyword points."""

    def __post_init__(self):
        """Validate ordering and sign of weights."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{f.name} must be a non-negative int, got {value!r}")
        if not (self.mood_baseline <= self.mood_compatible <= self.mood_exact):
            raise ValueError(
                f"mood weights must satisfy baseline <= compatible <= exact, got "
                f"{self.mood_baseline}/{self.mood_compatible}/{self.mood_exact}"
            )
        if self.genre_fit_default > self.genre_fit_max:
            raise ValueError(f"genre_fit_default {self.genre_fit_default} exceeds genre_fit_max {self.genre_fit_max}")
        if self.time_baseline > self.time_match:
            raise ValueError(f"time_baseline {self.time_baseline} exceeds time_match {self.time_match}")

    @property
    def max_total(self) -> int:
        """Upper bound of a total score."""
        return self.mood_exact + self.genre_fit_max + self.time_match + self.description_max

    @property
    def min_total(self) -> int:
        """Total of a game that only collects baselines."""
        return self.mood_baseline + self.genre_fit_default + self.time_baseline

    @classmethod
    def from_config(cls, overrides: Optional[Mapping[str, Any]]) -> "ScoringWeights":
        """Build weights from the `scoring` config section (unknown keys rejected)."""
        if not overrides:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown scoring weights: {', '.join(sorted(unknown))}")
        return cls(**dict(overrides))


def check_weights_against_tables(weights: ScoringWeights, tables: TaxonomyTables) -> None:
    """
    Ensure no genre table weight exceeds the genre fit ceiling.

    Raises:
        TaxonomyConfigError: when a table weight is above genre_fit_max
    """
    for mood, genre_weights in tables.mood_genre_weights.items():
        for genre, weight in genre_weights.items():
            if weight > weights.genre_fit_max:
                raise TaxonomyConfigError(
                    f"mood_genre_weights: {mood}/{genre} weight {weight} exceeds genre_fit_max {weights.genre_fit_max}"
                )

"""
Recommendation Service
======================

Wires taxonomy tables, the mood inference cache, the context scorer and the
reasoning generator into one explicitly constructed object. UI code owns the
service instance; there is no process-wide singleton.

Usage:
    service = RecommendationService.from_config(Config("config.yaml"))
    games = service.build_records(raw_games)
    ctx = UserContext.from_raw(mood="intense", time="short")
    for rec in service.top_recommendations(games, ctx, limit=5):
        ...
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config_loader import Config
from .feature_flags import FeatureFlags
from .library_filter import MasterMoodLike, count_by_master_mood, filter_by_master_mood, filter_by_title
from .logging_utils import format_count, stage_timer
from .mood_inference import MoodInferenceCache, MoodInferenceEngine
from .reasoning import attach_reasoning
from .records import GameRecord, UserContext, build_game_record
from .scoring import ScoringWeights, check_weights_against_tables, score_library
from .scoring.results import RecommendationScore
from .taxonomy import DEFAULT_TABLES, MasterMoodId, TaxonomyTables, tables_from_overrides

logger = logging.getLogger(__name__)

DEFAULT_TOP_LIMIT = 10


@dataclass(frozen=True)
class Recommendation:
    """A game paired with its explained score."""
    game: GameRecord
    score: RecommendationScore

    def to_dict(self) -> Dict[str, Any]:
        data = self.score.to_dict()
        data["title"] = self.game.title
        return data


class RecommendationService:
    """Scores and explains a library against a user context.

    Args:
        tables: Taxonomy tables (defaults when None)
        weights: Scoring weights (defaults when None)
        cache: Mood inference cache; pass one in to share it between services
        flags: Feature flags controlling record enrichment

    Raises:
        TaxonomyConfigError: if a table genre weight exceeds the weights' genre ceiling
    """

    def __init__(
        self,
        tables: Optional[TaxonomyTables] = None,
        weights: Optional[ScoringWeights] = None,
        cache: Optional[MoodInferenceCache] = None,
        flags: Optional[FeatureFlags] = None,
    ):
        self.tables = tables or DEFAULT_TABLES
        self.weights = weights or ScoringWeights()
        self.flags = flags or FeatureFlags()
        check_weights_against_tables(self.weights, self.tables)
        self.engine = MoodInferenceEngine(self.tables, cache)

    @classmethod
    def from_config(cls, config: Config, cache: Optional[MoodInferenceCache] = None) -> "RecommendationService":
        """Build a service from the scoring, taxonomy and experimental config sections."""
        tables = tables_from_overrides(config.taxonomy_overrides)
        weights = ScoringWeights.from_config(config.scoring_overrides)
        return cls(tables=tables, weights=weights, cache=cache, flags=FeatureFlags(config.config))

    @property
    def cache(self) -> MoodInferenceCache:
        return self.engine.cache

    def build_records(self, raw_games: Iterable[Mapping[str, Any]]) -> List[GameRecord]:
        """
        Validate raw game dicts into GameRecords.

        Records that cannot be built (no id, not a mapping) are logged and
        skipped; the rest keep their input order.
        """
        records: List[GameRecord] = []
        skipped = 0
        for position, raw in enumerate(raw_games):
            if not isinstance(raw, Mapping):
                logger.warning(f"Skipping library entry {position}: expected a mapping, got {type(raw).__name__}")
                skipped += 1
                continue
            try:
                records.append(
                    build_game_record(
                        raw,
                        tables=self.tables,
                        genres_from_tags=self.flags.genres_from_tags(),
                        detect_genres=self.flags.detect_genres_from_text(),
                        emotional_tags=self.flags.moods_from_emotional_tags(),
                        title_moods=self.flags.moods_from_title(),
                    )
                )
            except ValueError as exc:
                logger.warning(f"Skipping library entry {position}: {exc}")
                skipped += 1
        if skipped:
            logger.info(f"Built {format_count(len(records), 'game record')}, skipped {skipped}")
        else:
            logger.debug(f"Built {format_count(len(records), 'game record')}")
        return records

    def recommend(
        self,
        games: List[GameRecord],
        ctx: UserContext,
        limit: Optional[int] = None,
    ) -> List[Recommendation]:
        """
        Score, rank and explain games for a context.

        Args:
            games: Canonical game records
            ctx: User context
            limit: Maximum number of results (all when None)

        Returns:
            Recommendations, best first; [] for an empty library
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if not games:
            return []

        with stage_timer(f"Scoring {format_count(len(games), 'game')}", logger):
            ranked = score_library(games, ctx, self.engine, tables=self.tables, weights=self.weights)
        if limit is not None:
            ranked = ranked[:limit]
        return [Recommendation(game=game, score=attach_reasoning(score, ctx)) for game, score in ranked]

    def top_recommendations(
        self,
        games: List[GameRecord],
        ctx: UserContext,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> List[Recommendation]:
        return self.recommend(games, ctx, limit=limit)

    def browse(
        self,
        games: Iterable[GameRecord],
        master_mood: MasterMoodLike,
        title: Optional[str] = None,
    ) -> List[GameRecord]:
        """Games under a master mood using effective (explicit or inferred) moods, optionally title-searched first."""
        candidates = filter_by_title(games, title) if title else list(games)
        return filter_by_master_mood(candidates, master_mood, self.engine.moods_for, self.tables)

    def master_mood_counts(self, games: Iterable[GameRecord]) -> Dict[MasterMoodId, int]:
        return count_by_master_mood(games, self.engine.moods_for, self.tables)

    def clear_cache(self) -> None:
        """Drop all inferred moods, e.g. after a taxonomy table update."""
        self.engine.cache.clear()

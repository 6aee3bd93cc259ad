"""Unit tests for RecommendationService."""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from gamepilot.feature_flags import FeatureFlags
from gamepilot.mood_inference import MoodInferenceCache
from gamepilot.records import GameRecord, UserContext
from gamepilot.scoring import ConfidenceTier, ScoringWeights
from gamepilot.service import Recommendation, RecommendationService
from gamepilot.taxonomy import GenreId, MasterMoodId, MoodId, TaxonomyConfigError, tables_from_overrides


# =============================================================================
# build_records
# =============================================================================

class TestBuildRecords:
    """Boundary validation of raw library data."""

    def test_skips_entries_without_id(self, service, raw_library, caplog):
        with caplog.at_level(logging.WARNING, logger="gamepilot.service"):
            games = service.build_records(raw_library)
        assert [g.id for g in games] == ["doom", "stardew", "witcher3", "590380", "rocket"]
        assert "Entry Without Id" in caplog.text

    def test_skips_non_mappings(self, service):
        games = service.build_records([{"id": "a"}, "not a game", None, {"id": "b"}])
        assert [g.id for g in games] == ["a", "b"]

    def test_flags_enable_enrichment(self):
        raw = [{"id": "t", "tags": ["Souls-like"]}]
        plain = RecommendationService().build_records(raw)
        enriched = RecommendationService(
            flags=FeatureFlags({"experimental": {"genres_from_tags": True}})
        ).build_records(raw)
        assert plain[0].genres == ()
        assert enriched[0].genres == (GenreId.RPG,)

    @pytest.mark.parametrize("field,value", [
        ("moods", 7),
        ("tags", 3),
        ("genres", 2.5),
        ("estimatedSessionMinutes", float("inf")),
        ("estimatedSessionMinutes", float("nan")),
    ])
    def test_malformed_field_is_scored_with_baselines(self, service, field, value):
        games = service.build_records([{"id": "ok", "genres": ["RPG"]}, {"id": "bad", field: value}])
        assert [g.id for g in games] == ["ok", "bad"]
        recs = service.recommend(games, UserContext.from_raw(mood="intense", time="short"))
        bad = next(r for r in recs if r.game.id == "bad")
        assert bad.score.breakdown.time_alignment == 10

    def test_mood_flags_enable_enrichment(self):
        raw = [{"id": "r", "title": "Rocket League", "genres": ["Sports"]}, {"id": "s", "emotionalTags": ["cozy"]}]
        flags = FeatureFlags({"experimental": {"moods_from_title": True, "moods_from_emotional_tags": True}})
        games = RecommendationService(flags=flags).build_records(raw)
        assert games[0].moods == frozenset({MoodId.SOCIAL, MoodId.COMPETITIVE})
        assert games[1].moods == frozenset({MoodId.RELAXING})


# =============================================================================
# recommend / top_recommendations
# =============================================================================

class TestRecommend:
    """Full pipeline over the sample library."""

    def test_ranking_and_scores(self, service, library):
        ctx = UserContext.from_raw(mood="intense", time="short")
        recs = service.recommend(library, ctx)
        assert [r.game.id for r in recs] == ["doom", "590380", "witcher3", "rocket", "stardew"]
        assert [r.score.total_score for r in recs] == [99, 55, 45, 35, 25]
        assert all(isinstance(r, Recommendation) for r in recs)
        assert all(r.game.id == r.score.game_id for r in recs)

    def test_reasoning_attached(self, service, library):
        recs = service.recommend(library, UserContext.from_raw(mood="intense", time="short"))
        assert [r.score.reasoning.confidence for r in recs] == [
            ConfidenceTier.HIGH,
            ConfidenceTier.MEDIUM,
            ConfidenceTier.MEDIUM,
            ConfidenceTier.LOW,
            ConfidenceTier.LOW,
        ]

    def test_doom_breakdown(self, service, library):
        top = service.recommend(library, UserContext.from_raw(mood="intense", time="short"))[0]
        b = top.score.breakdown
        assert (b.mood_match, b.genre_fit, b.time_alignment, b.description_match) == (40, 30, 20, 9)

    def test_empty_library(self, service):
        assert service.recommend([], UserContext()) == []
        assert service.top_recommendations([], UserContext()) == []

    def test_limit(self, service, library):
        ctx = UserContext.from_raw(mood="relaxing")
        assert len(service.recommend(library, ctx, limit=2)) == 2
        assert len(service.recommend(library, ctx, limit=0)) == 0
        assert len(service.top_recommendations(library, ctx)) == len(library)
        assert len(service.top_recommendations(library, ctx, limit=3)) == 3

    def test_negative_limit(self, service, library):
        with pytest.raises(ValueError):
            service.recommend(library, UserContext(), limit=-1)

    def test_preferred_genre(self, service, library):
        ctx = UserContext.from_raw(mood="intense", time="short", genre="Sports")
        rocket = next(r for r in service.recommend(library, ctx) if r.game.id == "rocket")
        assert rocket.score.breakdown.genre_fit == 30

    def test_to_dict(self, service, library):
        rec = service.top_recommendations(library, UserContext.from_raw(mood="intense", time="short"), limit=1)[0]
        data = rec.to_dict()
        assert data["game_id"] == "doom"
        assert data["title"] == "Doom Eternal"
        assert data["reasoning"]["confidence"] == "high"


# =============================================================================
# browse / cache
# =============================================================================

class TestBrowseAndCache:
    """Master mood browsing and cache control."""

    def test_browse_uses_inferred_moods(self, service, library):
        assert [g.id for g in service.browse(library, MasterMoodId.ZEN)] == ["stardew", "witcher3"]

    def test_browse_with_title_search(self, service, library):
        assert [g.id for g in service.browse(library, "zen", title="valley")] == ["stardew"]

    def test_master_mood_counts(self, service, library):
        counts = service.master_mood_counts(library)
        assert counts[MasterMoodId.ADRENALINE] == 2
        assert counts[MasterMoodId.BRAIN_POWER] == 1

    def test_clear_cache(self, service, library):
        service.recommend(library, UserContext.from_raw(mood="intense"))
        assert service.cache.size() > 0
        service.clear_cache()
        assert service.cache.size() == 0

    def test_shared_cache(self, library):
        cache = MoodInferenceCache()
        RecommendationService(cache=cache).recommend(library, UserContext())
        assert RecommendationService(cache=cache).cache is cache
        assert cache.size() == 3

    def test_shared_cache_across_tables(self):
        cache = MoodInferenceCache()
        puzzle = [GameRecord(id="p", genres=(GenreId.PUZZLE,))]
        default_service = RecommendationService(cache=cache)
        custom_service = RecommendationService(
            tables=tables_from_overrides({"genre_moods": {"puzzle": ["relaxing"]}}),
            cache=cache,
        )
        assert default_service.browse(puzzle, MasterMoodId.BRAIN_POWER) == puzzle
        assert custom_service.browse(puzzle, MasterMoodId.ZEN) == puzzle
        assert custom_service.browse(puzzle, MasterMoodId.BRAIN_POWER) == []
        assert default_service.browse(puzzle, MasterMoodId.ZEN) == []


class TestConstruction:
    """Service construction checks."""

    def test_inconsistent_weights_rejected(self):
        with pytest.raises(TaxonomyConfigError):
            RecommendationService(weights=ScoringWeights(genre_fit_max=25, genre_fit_default=10))

"""Unit tests for feature flags.

Coverage:
- FeatureFlags initialization
- Individual flag getters
- Utility methods (get_active_flags, repr)
- Default behavior (all flags False)
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from gamepilot.feature_flags import FeatureFlags


# =============================================================================
# FeatureFlags Initialization Tests
# =============================================================================

class TestFeatureFlagsInit:
    """Test FeatureFlags initialization."""

    def test_init_empty_config(self):
        assert FeatureFlags({}).get_active_flags() == {}

    def test_init_none(self):
        assert FeatureFlags().get_active_flags() == {}

    def test_init_no_experimental_section(self):
        flags = FeatureFlags({"recommendations": {"limit": 5}})

        assert flags.get_active_flags() == {}
        assert flags.flags == {}

    def test_init_null_experimental_section(self):
        assert FeatureFlags({"experimental": None}).flags == {}

    def test_init_with_flags(self):
        config = {
            "experimental": {
                "genres_from_tags": True,
                "detect_genres_from_text": False,
            }
        }
        flags = FeatureFlags(config)

        assert flags.get_active_flags() == {"genres_from_tags": True}
        assert flags.genres_from_tags() is True
        assert flags.detect_genres_from_text() is False

    def test_unknown_flag_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gamepilot.feature_flags"):
            flags = FeatureFlags({"experimental": {"turbo_mode": True}})
        assert "turbo_mode" in caplog.text
        assert flags.genres_from_tags() is False


# =============================================================================
# Record Enrichment Flags Tests
# =============================================================================

class TestRecordEnrichmentFlags:
    """Test genre and mood enrichment flags."""

    def test_defaults_false(self):
        flags = FeatureFlags({})
        assert flags.genres_from_tags() is False
        assert flags.detect_genres_from_text() is False
        assert flags.moods_from_emotional_tags() is False
        assert flags.moods_from_title() is False

    def test_mood_enrichment_enabled(self):
        flags = FeatureFlags({"experimental": {"moods_from_emotional_tags": True, "moods_from_title": "yes"}})
        assert flags.moods_from_emotional_tags() is True
        assert flags.moods_from_title() is True

    def test_detect_genres_enabled(self):
        flags = FeatureFlags({"experimental": {"detect_genres_from_text": True}})
        assert flags.detect_genres_from_text() is True

    def test_truthy_values_coerced(self):
        flags = FeatureFlags({"experimental": {"genres_from_tags": 1}})
        assert flags.genres_from_tags() is True


# =============================================================================
# Utility Method Tests
# =============================================================================

class TestUtilityMethods:
    """Test repr and flag listings."""

    def test_repr_no_flags(self):
        assert repr(FeatureFlags({})) == "FeatureFlags(no active flags)"

    def test_repr_with_flags(self):
        flags = FeatureFlags({"experimental": {"genres_from_tags": True}})
        assert "genres_from_tags" in repr(flags)

    def test_active_flags_is_a_copy(self):
        flags = FeatureFlags({"experimental": {"genres_from_tags": True}})
        flags.get_active_flags()["genres_from_tags"] = False
        assert flags.genres_from_tags() is True

"""Unit tests for taxonomy normalization.

Coverage:
- Genre normalization (canonical, names, aliases, numeric platform ids, dicts)
- Mood normalization (canonical spellings, legacy names, store categories)
- Idempotence on canonical input
- Unknown input resolves to UNKNOWN, never raises
- Text-based genre detection
- Title-pattern mood detection
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from gamepilot.taxonomy import (
    GenreId,
    MasterMoodId,
    MoodId,
    detect_genres_from_text,
    detect_moods_from_title,
    normalize_genre,
    normalize_genres,
    normalize_master_mood,
    normalize_mood,
    normalize_moods,
    normalize_tags,
)


# =============================================================================
# Genre Normalization
# =============================================================================

class TestNormalizeGenre:
    """Test single-value genre normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("action", GenreId.ACTION),
        ("Action", GenreId.ACTION),
        ("  RPG  ", GenreId.RPG),
        ("Massively Multiplayer", GenreId.MULTIPLAYER),
        ("FPS", GenreId.SHOOTER),
        ("Real-Time Strategy", GenreId.STRATEGY),
        ("real_time_strategy", GenreId.STRATEGY),
        ("Souls-like", GenreId.RPG),
        ("Point & Click", GenreId.PUZZLE),
        ("Beat 'em up", GenreId.ACTION),
        ("Survival", GenreId.HORROR),
    ])
    def test_names_and_aliases(self, raw, expected):
        assert normalize_genre(raw) is expected

    @pytest.mark.parametrize("raw,expected", [
        (1, GenreId.ACTION),
        ("2", GenreId.STRATEGY),
        (23, GenreId.INDIE),
        ("29", GenreId.MULTIPLAYER),
        (70, GenreId.INDIE),
    ])
    def test_platform_numeric_ids(self, raw, expected):
        assert normalize_genre(raw) is expected

    def test_unmapped_numeric_id_is_unknown(self):
        assert normalize_genre(99999) is GenreId.UNKNOWN

    def test_dict_entry_prefers_name(self):
        assert normalize_genre({"id": "1", "description": "Strategy"}) is GenreId.STRATEGY
        assert normalize_genre({"id": 25}) is GenreId.ADVENTURE

    @pytest.mark.parametrize("raw", [
        None, "", "   ", "not a genre", True, 3.5, ["action"],
        "²", "١٢", "1" * 5000,
    ])
    def test_unrecognised_is_unknown(self, raw):
        assert normalize_genre(raw) is GenreId.UNKNOWN

    def test_idempotent_on_canonical(self):
        for genre in GenreId:
            assert normalize_genre(genre) is genre
            assert normalize_genre(genre.value) is genre


class TestNormalizeGenres:
    """Test list genre normalization."""

    def test_drops_unknown_and_duplicates_preserving_order(self):
        raw = ["Shooter", "FPS", "nonsense", "Action", 1]
        assert normalize_genres(raw) == [GenreId.SHOOTER, GenreId.ACTION]

    def test_single_string(self):
        assert normalize_genres("Indie") == [GenreId.INDIE]

    def test_none_is_empty(self):
        assert normalize_genres(None) == []

    @pytest.mark.parametrize("raw", [2.5, True, b"action", object()])
    def test_non_list_scalars_are_empty(self, raw):
        assert normalize_genres(raw) == []

    def test_single_numeric_id(self):
        assert normalize_genres(23) == [GenreId.INDIE]


# =============================================================================
# Mood Normalization
# =============================================================================

class TestNormalizeMood:
    """Test mood normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("intense", MoodId.INTENSE),
        ("Story Rich", MoodId.STORY_RICH),
        ("story_rich", MoodId.STORY_RICH),
        ("HIGH-ENERGY", MoodId.HIGH_ENERGY),
        ("chill", MoodId.RELAXING),
        ("scary", MoodId.ATMOSPHERIC),
        ("Multi-player", MoodId.SOCIAL),
        ("Achievements", MoodId.COMPETITIVE),
        ({"moodId": "creative"}, MoodId.CREATIVE),
    ])
    def test_known_spellings(self, raw, expected):
        assert normalize_mood(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "sleepy", 42])
    def test_unrecognised_is_unknown(self, raw):
        assert normalize_mood(raw) is MoodId.UNKNOWN

    def test_idempotent_on_canonical(self):
        for mood in MoodId:
            assert normalize_mood(mood) is mood
            assert normalize_mood(mood.value) is mood

    def test_normalize_moods_is_a_set_without_unknown(self):
        moods = normalize_moods(["chill", "calm", "sleepy", "Competitive"])
        assert moods == frozenset({MoodId.RELAXING, MoodId.COMPETITIVE})

    def test_normalize_moods_none(self):
        assert normalize_moods(None) == frozenset()

    @pytest.mark.parametrize("raw", [7, 2.5, True])
    def test_normalize_moods_non_list_scalars(self, raw):
        assert normalize_moods(raw) == frozenset()

    def test_master_mood_names_as_moods(self):
        assert normalize_mood("brain-power") is MoodId.STRATEGIC
        assert normalize_mood("zen") is MoodId.RELAXING


class TestNormalizeMasterMood:
    """Test master mood id resolution."""

    def test_known_ids(self):
        assert normalize_master_mood("brain-power") is MasterMoodId.BRAIN_POWER
        assert normalize_master_mood("Brain Power") is MasterMoodId.BRAIN_POWER
        assert normalize_master_mood(MasterMoodId.ZEN) is MasterMoodId.ZEN

    def test_unknown_is_none(self):
        assert normalize_master_mood("sleepy") is None
        assert normalize_master_mood(None) is None


# =============================================================================
# Tags and Text Detection
# =============================================================================

class TestNormalizeTags:
    """Test free-form tag cleanup."""

    def test_trims_and_dedups_case_insensitively(self):
        assert normalize_tags(["  Open  World ", "open world", "Co-op", 7, None]) == ["Open World", "Co-op"]

    def test_empty(self):
        assert normalize_tags(None) == []
        assert normalize_tags([]) == []
        assert normalize_tags(3) == []


class TestDetectGenresFromText:
    """Test keyword genre detection."""

    def test_detects_from_title(self):
        assert detect_genres_from_text("Football Manager 2024") == [GenreId.SPORTS]

    def test_caps_number_of_genres(self):
        genres = detect_genres_from_text("Dungeon puzzle racing", "zombie combat")
        assert len(genres) == 2

    def test_no_text(self):
        assert detect_genres_from_text(None, None) == []
        assert detect_genres_from_text("", "") == []


class TestDetectMoodsFromTitle:
    """Test title-pattern mood detection."""

    def test_known_title(self):
        assert detect_moods_from_title("Rocket League") == frozenset({MoodId.SOCIAL, MoodId.COMPETITIVE})

    def test_patterns_union(self):
        moods = detect_moods_from_title("Minecraft: Dungeons of Doom")
        assert moods == frozenset({MoodId.CREATIVE, MoodId.INTENSE, MoodId.ACTION_PACKED})

    def test_whole_words_only(self):
        assert detect_moods_from_title("Trusty Steed") == frozenset()
        assert detect_moods_from_title("Rust") == frozenset({MoodId.SOCIAL})

    def test_curly_apostrophe(self):
        assert detect_moods_from_title("Garry’s Mod") == frozenset({MoodId.CREATIVE, MoodId.EXPERIMENTAL})

    def test_no_title(self):
        assert detect_moods_from_title(None) == frozenset()
        assert detect_moods_from_title("Stardew Valley") == frozenset()

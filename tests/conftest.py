"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gamepilot.mood_inference import MoodInferenceCache
from gamepilot.service import RecommendationService


def _raw_library():
    """A small library in the shapes a store import produces."""
    return [
        {
            "id": "doom",
            "title": "Doom Eternal",
            "genres": ["Action", "Shooter"],
            "description": "Fast, brutal combat against demons",
            "estimatedSessionMinutes": 25,
        },
        {
            "id": "stardew",
            "title": "Stardew Valley",
            "genres": ["Simulation", "Casual"],
            "moods": ["chill", "cozy"],
            "description": "A peaceful farming life",
            "estimatedSessionMinutes": 60,
        },
        {
            "id": "witcher3",
            "title": "The Witcher 3",
            "genres": ["RPG", "Adventure"],
            "description": "Open world story with memorable characters and choices",
            "estimatedSessionMinutes": 120,
        },
        {
            "appid": 590380,
            "name": "Into the Breach",
            "genres": [{"id": "2", "description": "Strategy"}, 23],
            "description": "Turn-based tactical battles",
            "sessionTime": "30 min",
        },
        {
            "id": "rocket",
            "title": "Rocket League",
            "genres": ["Sports", "Racing"],
            "moods": ["Multi-player", "Achievements"],
            "estimatedSessionMinutes": 15,
        },
        {
            "title": "Entry Without Id",
            "genres": ["Puzzle"],
        },
    ]


@pytest.fixture()
def raw_library():
    return _raw_library()


@pytest.fixture()
def service():
    return RecommendationService(cache=MoodInferenceCache())


@pytest.fixture()
def library(service, raw_library):
    """Canonical records for the sample library (the id-less entry is skipped)."""
    return service.build_records(raw_library)

"""
GamePilot recommender core.

Mood-aware game recommendations: taxonomy normalization, mood inference,
context scoring, reasoning and master-mood browsing over a game library.
"""

from .records import GameRecord, SessionBucket, UserContext, build_game_record
from .service import Recommendation, RecommendationService
from .taxonomy import GenreId, MasterMoodId, MoodId

__version__ = "0.3.0"

__all__ = [
    "GameRecord",
    "SessionBucket",
    "UserContext",
    "build_game_record",
    "Recommendation",
    "RecommendationService",
    "GenreId",
    "MoodId",
    "MasterMoodId",
    "__version__",
]

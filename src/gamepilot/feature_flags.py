"""Feature flags for optional record enrichment.

All flags default to False, which keeps record building to the plain
genre/mood normalization path.

Usage:
    from gamepilot.feature_flags import FeatureFlags

    # Load from config
    config = Config("config.yaml")
    flags = FeatureFlags(config.config)

    # Check flags
    if flags.genres_from_tags():
        ...

Configuration:
    Add to config.yaml under 'experimental' section:

    experimental:
      genres_from_tags: false
      detect_genres_from_text: false
      moods_from_emotional_tags: false
      moods_from_title: false
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

KNOWN_FLAGS = (
    "genres_from_tags",
    "detect_genres_from_text",
    "moods_from_emotional_tags",
    "moods_from_title",
)


class FeatureFlags:
    """Feature flags read from the 'experimental' config section.

    Unset flags are False. Unrecognised flag names are logged as a warning
    and never read.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize feature flags from configuration.

        Args:
            config: Configuration dictionary (usually from Config.config)
        """
        self.flags = dict((config or {}).get('experimental') or {})

        unknown = sorted(name for name in self.flags if name not in KNOWN_FLAGS)
        if unknown:
            logger.warning(f"Unknown experimental flags ignored: {', '.join(unknown)}")

        active_flags = self.get_active_flags()
        if active_flags:
            logger.info(f"Active feature flags: {', '.join(active_flags)}")
        else:
            logger.debug("No experimental features enabled")

    # ==================================================================================
    # Record Enrichment Flags
    # ==================================================================================

    def genres_from_tags(self) -> bool:
        """Derive genres from store tags when a game has no genre field.

        Returns:
            True if tags should be used as a genre fallback
        """
        return bool(self.flags.get('genres_from_tags', False))

    def detect_genres_from_text(self) -> bool:
        """Guess genres from title and description keywords as a last resort.

        Returns:
            True if keyword genre detection should run
        """
        return bool(self.flags.get('detect_genres_from_text', False))

    def moods_from_emotional_tags(self) -> bool:
        """Merge emotional tags (chill, cozy, focused, energetic) into a game's explicit moods."""
        return bool(self.flags.get('moods_from_emotional_tags', False))

    def moods_from_title(self) -> bool:
        """Take moods from known title patterns for games without explicit moods.

        Returns:
            True if title pattern moods should be applied
        """
        return bool(self.flags.get('moods_from_title', False))

    # ==================================================================================
    # Utility Methods
    # ==================================================================================

    def get_active_flags(self) -> Dict[str, bool]:
        """Dictionary of flag_name: True for all enabled flags."""
        return {name: value for name, value in self.flags.items() if value}

    def __repr__(self) -> str:
        active = self.get_active_flags()
        if not active:
            return "FeatureFlags(no active flags)"
        return f"FeatureFlags(active: {list(active.keys())})"

"""
Configuration Loader - YAML configuration for the recommender
"""
import os
from typing import Any, Dict, Optional

import yaml

DEFAULT_RECOMMENDATION_LIMIT = 10

# Recognised top-level sections; each is an optional mapping
_SECTIONS = ('logging', 'recommendations', 'scoring', 'taxonomy', 'experimental')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class Config:
    """Configuration manager for GamePilot.

    Every section is optional; a missing file path (None) gives the built-in
    defaults. Table and weight overrides are only shape-checked here; their
    contents are validated when ScoringWeights / TaxonomyTables are built.
    """

    def __init__(self, config_path: Optional[str] = "config.yaml"):
        self.config_path = config_path
        self.config = self._load_config()
        self._validate_config()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a Config from an in-memory mapping (no file)."""
        config = cls.__new__(cls)
        config.config_path = None
        config.config = dict(data or {})
        config._validate_config()
        return config

    def _load_config(self) -> dict:
        """Load configuration from YAML file"""
        if self.config_path is None:
            return {}
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")
        return data

    def _validate_config(self):
        """Validate section shapes and scalar settings"""
        unknown = sorted(str(k) for k in self.config if k not in _SECTIONS)
        if unknown:
            raise ValueError(f"Unknown configuration section(s): {', '.join(unknown)}")

        for section in _SECTIONS:
            value = self.config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

        level = self.get('logging', 'level')
        if level is not None and str(level).upper() not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")

        limit = self.get('recommendations', 'limit')
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
            raise ValueError(f"recommendations.limit must be a positive integer, got {limit!r}")

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            section: Configuration section
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        values = self.config.get(section) or {}
        return values.get(key, default)

    def section(self, name: str) -> Dict[str, Any]:
        """A whole section as a dict (empty when absent)."""
        return dict(self.config.get(name) or {})

    @property
    def log_level(self) -> str:
        """Console log level (LOG_LEVEL env var wins at configure time)"""
        return str(self.get('logging', 'level', 'INFO')).upper()

    @property
    def log_file(self) -> Optional[str]:
        return self.get('logging', 'file')

    @property
    def recommendation_limit(self) -> int:
        """Default number of recommendations returned"""
        return self.get('recommendations', 'limit', DEFAULT_RECOMMENDATION_LIMIT)

    @property
    def scoring_overrides(self) -> Dict[str, Any]:
        """ScoringWeights field overrides"""
        return self.section('scoring')

    @property
    def taxonomy_overrides(self) -> Dict[str, Any]:
        """Taxonomy table overrides, merged over the defaults"""
        return self.section('taxonomy')

    @property
    def experimental(self) -> Dict[str, Any]:
        return self.section('experimental')

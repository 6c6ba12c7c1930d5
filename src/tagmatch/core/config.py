"""Configuration management for tagmatch."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class MatchConfig:
    """Match engine configuration."""

    # Fuzzy scores are distances: 0.0 is identical, 1.0 shares nothing
    fuzzy_threshold: float = 0.4
    fuzzy_enabled: bool = True
    fuzzy_limit: int = 50


@dataclass
class Config:
    """Main application configuration."""

    match: MatchConfig = field(default_factory=MatchConfig)
    ontology_path: Path | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Config with file values and environment overrides applied.
        """
        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()
        config._apply_dict(data)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, TAGMATCH_CONFIG, or the environment only."""
        path = path or os.environ.get("TAGMATCH_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_dict(self, data: dict[str, Any]) -> None:
        if ontology := data.get("ontology_path"):
            self.ontology_path = Path(ontology)

        match = data.get("match", {})
        if "fuzzy_threshold" in match:
            self.match.fuzzy_threshold = float(match["fuzzy_threshold"])
        if "fuzzy_enabled" in match:
            self.match.fuzzy_enabled = bool(match["fuzzy_enabled"])
        if "fuzzy_limit" in match:
            self.match.fuzzy_limit = int(match["fuzzy_limit"])

    def _apply_env(self) -> None:
        if threshold := os.environ.get("TAGMATCH_FUZZY_THRESHOLD"):
            self.match.fuzzy_threshold = float(threshold)

        if enabled := os.environ.get("TAGMATCH_FUZZY_ENABLED"):
            self.match.fuzzy_enabled = enabled.lower() in ("1", "true", "yes", "on")

        if limit := os.environ.get("TAGMATCH_FUZZY_LIMIT"):
            self.match.fuzzy_limit = int(limit)

        if path := os.environ.get("TAGMATCH_ONTOLOGY"):
            self.ontology_path = Path(path)

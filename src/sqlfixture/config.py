"""
Configuration loader for sqlfixture.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class FixtureConfig:
    """
    Configuration for populating fixtures.

    Loads an optional YAML file, then applies environment overrides.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (optional)
        """
        self.config_path = config_path
        self.config = self._default_config()
        if config_path:
            self.config.update(self._load_config())
        self._apply_env_overrides()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        logger.info(f"Loading config from: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return config or {}

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "connection_string": None,
            "placeholder": "?",
            "validate_identifiers": False,
            "commit": True,
        }

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to loaded config."""
        conn_str = os.environ.get("SQLFIXTURE_CONN_STR")
        if conn_str:
            self.config["connection_string"] = conn_str

        placeholder = os.environ.get("SQLFIXTURE_PLACEHOLDER")
        if placeholder:
            self.config["placeholder"] = placeholder

        validate = os.environ.get("SQLFIXTURE_VALIDATE_IDENTIFIERS")
        if validate:
            self.config["validate_identifiers"] = validate.strip().lower() in _TRUE_VALUES

    @property
    def connection_string(self) -> Optional[str]:
        return self.config.get("connection_string")

    @property
    def placeholder(self) -> str:
        return self.config.get("placeholder") or "?"

    @property
    def validate_identifiers(self) -> bool:
        return bool(self.config.get("validate_identifiers", False))

    @property
    def commit(self) -> bool:
        return bool(self.config.get("commit", True))

"""
Configuration management for services.
"""

import json
import os
from typing import Any

import yaml

from dotenv import load_dotenv


class ServiceConfig:
    """Configuration management for services using environment variables."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # Always load .env from backend directory (where app.py is located)
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=True)
        self.config: dict[str, Any] = {}
        self.deck_settings: dict[str, Any] = {}
        self.deck_settings_path = os.getenv(
            "DECK_SETTINGS_PATH",
            os.path.join(os.path.dirname(__file__), "../../config/deck.yaml"),
        )
        self.load_from_env()
        self.load_deck_settings()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "database_url": os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL"),
            "data_dir": os.getenv("DATA_DIR", ".data"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "allowed_origins": json.loads(os.getenv("ALLOWED_ORIGINS", '["*"]')),
            "analytics_export_dir": os.getenv("ANALYTICS_EXPORT_DIR", "./analytics_exports"),
            "preferences_path": os.getenv(
                "PREFERENCES_PATH",
                os.path.join(os.path.expanduser("~"), ".deckshare", "preferences.json"),
            ),
            "public_base_url": os.getenv("PUBLIC_BASE_URL", "http://localhost:8000"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.load_from_env()
        self.load_deck_settings()

    def load_deck_settings(self) -> None:
        """Load deck settings from YAML file."""
        path = os.path.abspath(self.deck_settings_path)
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        self.deck_settings = data

    def get_setting(self, path: str, default: Any = None) -> Any:
        """Retrieve a deck setting via dotted path."""
        env_override_key = f"DECK_FLAG_{path.replace('.', '_').upper()}"
        env_value = os.getenv(env_override_key)
        if env_value is not None:
            return self._coerce_env_value(env_value, default)

        node: Any = self.deck_settings
        for part in path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node if node is not None else default

    def set_deck_settings(self, deck_settings: dict[str, Any]) -> None:
        """Override deck settings (useful for tests)."""
        self.deck_settings = deck_settings

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered.replace(".", "", 1).isdigit():
            try:
                return float(lowered) if "." in lowered else int(lowered)
            except ValueError:
                return raw
        return raw or default


# Global configuration instance
config = ServiceConfig()

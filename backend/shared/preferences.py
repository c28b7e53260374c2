"""
Local preference store for editor clients (theme, remembered link, author).
"""

import json
import os
import threading
from pathlib import Path
from typing import Any

from shared.enums import Preference
from shared.utils import config, setup_logging

logger = setup_logging("preferences")


class PreferenceStore:
    """Small key/value store persisted as one JSON object on disk."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or config.get("preferences_path"))
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def get(self, key: Preference, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(Preference(key).value, default)

    def set(self, key: Preference, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[Preference(key).value] = value
            self._save(data)

    def delete(self, key: Preference) -> None:
        """Forget a preference; unknown keys are ignored."""
        with self._lock:
            data = self._load()
            if data.pop(Preference(key).value, None) is not None:
                self._save(data)

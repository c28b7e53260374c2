from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from shared.config import ServiceConfig, config
from shared.logging_utils import setup_logging

__all__ = [
    "ServiceConfig",
    "config",
    "ensure_directory",
    "generate_link_id",
    "setup_logging",
    "utc_now",
]


def utc_now() -> datetime:
    """Timezone-aware current time, used for every persisted timestamp."""
    return datetime.now(UTC)


def generate_link_id(length: int = 8) -> str:
    """Short share-link identifier suitable for a URL path segment."""
    return uuid4().hex[:length]


def ensure_directory(path: str | Path) -> None:
    """Ensure directory exists, create if not"""
    Path(path).mkdir(parents=True, exist_ok=True)

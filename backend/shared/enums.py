"""
Enums and constants used across the application.
"""

from enum import Enum


class SlideLayout(str, Enum):
    """Layouts a catalog slide can render with."""

    TITLE = "title"
    SECTION = "section"
    BIG_TEXT = "big-text"
    TEXT = "text"
    TWO_COLUMN = "two-column"
    BULLETS = "bullets"
    TABLE = "table"


class ShareLinkAction(str, Enum):
    """Mutations accepted by the share-link PATCH endpoint."""

    ENABLE = "enable"
    DISABLE = "disable"
    REFRESH = "refresh"
    RENAME = "rename"


class LinkViewStatus(str, Enum):
    """Outcome of resolving a share link for an anonymous viewer."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class ExportFormat(str, Enum):
    """Available export formats for view analytics."""

    JSON = "json"
    CSV = "csv"


class Preference(str, Enum):
    """Keys held by the local preference store."""

    THEME = "theme"
    SHARE_LINK_ID = "share_link_id"
    COMMENT_AUTHOR = "comment_author"

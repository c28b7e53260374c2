"""
Analytics Service - view tracking for share links.

This service provides endpoints for:
- Recording how long each recipient spends on each slide
- Listing raw view events
- Aggregating per-recipient and per-slide totals for the dashboard
- Exporting view events as JSON or CSV

Usage:
    from services.analytics import app as analytics_app
    # Mount analytics routes in main application
"""

from .app import app
from .service import AnalyticsService, format_duration

__all__ = ["app", "AnalyticsService", "format_duration"]

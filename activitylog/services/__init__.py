"""Business logic services."""
from .event_service import EventService
from .analytics_service import AnalyticsService, day_bounds, week_bounds

__all__ = ['EventService', 'AnalyticsService', 'day_bounds', 'week_bounds']

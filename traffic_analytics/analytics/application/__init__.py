from .builder import AnalyticsApplicationBuilder
from .service import TrafficAnalyticsService

__all__ = ["AnalyticsApplicationBuilder", "TrafficAnalyticsService"]

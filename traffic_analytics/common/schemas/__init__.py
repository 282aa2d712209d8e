from .traffic import (
    TrafficRecordSchema,
    ForecastSchema,
    StatisticsSchema,
    PageSchema,
    ErrorDetails,
)

__all__ = [
    "TrafficRecordSchema",
    "ForecastSchema",
    "StatisticsSchema",
    "PageSchema",
    "ErrorDetails",
]

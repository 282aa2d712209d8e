"""
Domain module initialization.
"""
from .entities import (
    TrafficRecord,
    TrafficCondition,
    Forecast,
    TrafficStatistics,
    RecordPage
)
from .repositories import TrafficRecordStore

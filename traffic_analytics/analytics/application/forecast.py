"""
Threshold-based traffic forecast.

The prediction is a pure arithmetic function of the mean car count over
the lookback window preceding the requested start time:

    avg < 10        -> LOW       (confidence 0.85)
    10 <= avg < 30  -> MODERATE  (confidence 0.75)
    avg >= 30       -> HIGH      (confidence 0.80)

Derived metrics truncate towards zero where an integer is produced.
"""
import math
from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

from ..domain import Forecast, TrafficCondition, TrafficRecord, TrafficRecordStore
from ...common.exceptions import InsufficientHistoryError, InvalidInputError
from ...common.logging import setup_logger

logger = setup_logger(__name__)

LOOKBACK_DAYS = 30
BASE_TRAVEL_TIME_MINUTES = 15
BASE_SPEED_KMH = 60.0
MIN_SPEED_KMH = 10.0
SPEED_DROP_PER_CAR = 0.5
VOLUME_FACTOR = 0.8
CONGESTION_DIVISOR = 50.0


def classify(avg: float) -> Tuple[TrafficCondition, float]:
    if avg < 10:
        return TrafficCondition.LOW, 0.85
    if avg < 30:
        return TrafficCondition.MODERATE, 0.75
    return TrafficCondition.HIGH, 0.80


def average_speed(avg: float) -> float:
    # Speed falls linearly with traffic, floored at MIN_SPEED_KMH
    return max(MIN_SPEED_KMH, BASE_SPEED_KMH - avg * SPEED_DROP_PER_CAR)


def expected_volume(avg: float) -> int:
    return math.floor(avg * VOLUME_FACTOR)


def expected_travel_time(avg: float) -> int:
    return math.floor(BASE_TRAVEL_TIME_MINUTES * (1.0 + avg / CONGESTION_DIVISOR))


def build_forecast(start_time: datetime, end_time: datetime,
                   history: Sequence[TrafficRecord]) -> Forecast:
    """Single factory for Forecast values."""
    if not history:
        raise InsufficientHistoryError("Insufficient historical data for prediction")

    avg = sum(r.car_count for r in history) / len(history)
    condition, confidence = classify(avg)

    return Forecast(
        start_time=start_time,
        end_time=end_time,
        condition=condition,
        confidence=confidence,
        average_speed=average_speed(avg),
        expected_volume=expected_volume(avg),
        expected_travel_time_minutes=expected_travel_time(avg),
        details=f"Prediction based on {len(history)} historical data points"
    )


class TrafficForecaster:
    def __init__(self, store: TrafficRecordStore, lookback_days: int = LOOKBACK_DAYS):
        self.store = store
        self.lookback = timedelta(days=lookback_days)

    def predict(self, start_time: Optional[datetime], end_time: Optional[datetime]) -> Forecast:
        if start_time is None or end_time is None:
            raise InvalidInputError("Start time and end time are required")
        if start_time > end_time:
            raise InvalidInputError("Start time must be before or equal to end time")

        history = self.store.find_by_timestamp_range(start_time - self.lookback, start_time)
        logger.debug(f"Predicting traffic from {start_time} to {end_time} using {len(history)} samples")
        return build_forecast(start_time, end_time, history)

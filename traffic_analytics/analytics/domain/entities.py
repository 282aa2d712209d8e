"""
Domain entities for the Traffic Analytics module.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


def _now() -> datetime:
    return datetime.now()


@dataclass(frozen=True)
class TrafficRecord:
    """
    A single vehicle-count observation.
    Records are append-only: never updated or removed once stored.
    """
    timestamp: datetime
    car_count: int
    recorded_at: datetime = field(default_factory=_now)
    id: Optional[int] = None

    def with_id(self, record_id: int) -> 'TrafficRecord':
        return TrafficRecord(
            timestamp=self.timestamp,
            car_count=self.car_count,
            recorded_at=self.recorded_at,
            id=record_id
        )


class TrafficCondition(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


@dataclass(frozen=True)
class Forecast:
    """
    Predicted traffic conditions for a requested window. Not persisted.
    """
    start_time: datetime
    end_time: datetime
    condition: TrafficCondition
    confidence: float
    average_speed: float
    expected_volume: int
    expected_travel_time_minutes: int
    details: str
    # Reserved for a richer model
    potential_incidents: Optional[str] = None
    alternative_routes: Optional[str] = None


@dataclass(frozen=True)
class TrafficStatistics:
    total_cars: int
    average_cars_per_day: float
    total_records: int
    peak_hour: Optional[int] = None
    cars_in_peak_hour: Optional[int] = None

    @property
    def peak_hour_label(self) -> Optional[str]:
        if self.peak_hour is None:
            return None
        return f"{self.peak_hour:02d}:00 - {self.peak_hour:02d}:59"


@dataclass(frozen=True)
class RecordPage:
    """A slice of the record set for paginated listing."""
    content: list
    page_number: int
    page_size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return -(-self.total_elements // self.page_size)

    @property
    def last(self) -> bool:
        return self.page_number >= self.total_pages - 1

from datetime import datetime
from typing import Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class TrafficRecordSchema(BaseModel):
    """
    A stored vehicle-count observation as exposed over HTTP.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, description="Store-assigned identifier")
    timestamp: datetime = Field(..., description="Observation time (local)")
    car_count: int = Field(..., ge=0, alias="carCount", description="Number of cars counted")
    recorded_at: datetime = Field(..., alias="createdAt", description="Audit time the record was stored")

    @classmethod
    def from_entity(cls, record) -> "TrafficRecordSchema":
        return cls(
            id=record.id,
            timestamp=record.timestamp,
            car_count=record.car_count,
            recorded_at=record.recorded_at
        )


class ForecastSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_time: datetime = Field(..., alias="startTime")
    end_time: datetime = Field(..., alias="endTime")
    condition: str = Field(..., alias="trafficCondition", description="LOW, MODERATE or HIGH")
    confidence: float = Field(..., ge=0.0, le=1.0, alias="confidenceScore")
    details: str
    average_speed: float = Field(..., alias="averageSpeed", description="Expected speed in km/h")
    expected_volume: int = Field(..., ge=0, alias="expectedVolume")
    potential_incidents: Optional[str] = Field(None, alias="potentialIncidents")
    alternative_routes: Optional[str] = Field(None, alias="alternativeRoutes")
    expected_travel_time_minutes: int = Field(..., ge=0, alias="expectedTravelTimeMinutes")

    @classmethod
    def from_entity(cls, forecast) -> "ForecastSchema":
        return cls(
            start_time=forecast.start_time,
            end_time=forecast.end_time,
            condition=forecast.condition.value,
            confidence=forecast.confidence,
            details=forecast.details,
            average_speed=forecast.average_speed,
            expected_volume=forecast.expected_volume,
            potential_incidents=forecast.potential_incidents,
            alternative_routes=forecast.alternative_routes,
            expected_travel_time_minutes=forecast.expected_travel_time_minutes
        )


class StatisticsSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_cars: int = Field(..., ge=0, alias="totalCars")
    average_cars_per_day: str = Field(..., alias="averageCarsPerDay", description="Mean of daily totals, two decimals")
    total_records: int = Field(..., ge=0, alias="totalRecords")
    peak_hour: Optional[str] = Field(None, alias="peakHour", description="e.g. '08:00 - 08:59'")
    cars_in_peak_hour: Optional[int] = Field(None, alias="carsInPeakHour")

    @classmethod
    def from_entity(cls, stats) -> "StatisticsSchema":
        return cls(
            total_cars=stats.total_cars,
            average_cars_per_day=f"{stats.average_cars_per_day:.2f}",
            total_records=stats.total_records,
            peak_hour=stats.peak_hour_label,
            cars_in_peak_hour=stats.cars_in_peak_hour
        )


class PageSchema(BaseModel, Generic[T]):
    model_config = ConfigDict(populate_by_name=True)

    content: List[T]
    page_number: int = Field(..., ge=0, alias="pageNumber")
    page_size: int = Field(..., ge=1, alias="pageSize")
    total_elements: int = Field(..., ge=0, alias="totalElements")
    total_pages: int = Field(..., ge=0, alias="totalPages")
    last: bool


class ErrorDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(default_factory=datetime.now)
    message: str
    details: Optional[str] = None
    error_code: str = Field(..., alias="errorCode")
    additional_details: Optional[Dict[str, object]] = Field(None, alias="additionalDetails")

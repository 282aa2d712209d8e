"""
API for ingesting and querying traffic records.
"""
from datetime import datetime
from fastapi import FastAPI, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse
from typing import Dict, List

from ..dependencies import get_service
from ....application.service import TrafficAnalyticsService
from .....common.schemas import PageSchema, StatisticsSchema, TrafficRecordSchema
from .....common.logging import setup_logger

logger = setup_logger(__name__)

app = FastAPI()

SORT_FIELDS = {
    "id": "id",
    "timestamp": "timestamp",
    "carCount": "car_count",
    "car_count": "car_count",
    "createdAt": "recorded_at",
}

@app.post("/api/v1/traffic/upload", status_code=201, response_class=PlainTextResponse)
async def upload_traffic_data(file: UploadFile = File(...),
                              service: TrafficAnalyticsService = Depends(get_service)):
    """Uploads a text file of `<timestamp> <count>` lines."""
    logger.info(f"Received file upload request: {file.filename}")
    content = await file.read()
    if not content.strip():
        raise HTTPException(status_code=400, detail="File cannot be empty")
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 text")
    service.ingest_bulk(text)
    return "File processed successfully"

@app.post("/api/v1/traffic", response_model=TrafficRecordSchema)
def add_traffic_data(timestamp: datetime = Query(...),
                     car_count: int = Query(..., alias="carCount"),
                     service: TrafficAnalyticsService = Depends(get_service)):
    logger.info(f"Received request to add traffic data - Timestamp: {timestamp}, Car Count: {car_count}")
    return TrafficRecordSchema.from_entity(service.add_record(timestamp, car_count))

@app.get("/api/v1/traffic", response_model=PageSchema[TrafficRecordSchema])
def get_traffic_data(page: int = 0, size: int = 10, sort: str = "timestamp,desc",
                     service: TrafficAnalyticsService = Depends(get_service)):
    """Paginated listing, `sort` as `<field>,<asc|desc>`."""
    field, _, direction = sort.partition(",")
    if field not in SORT_FIELDS:
        raise HTTPException(status_code=400, detail=f"Cannot sort by '{field}'")
    result = service.list_records(
        page=page, size=size,
        sort_by=SORT_FIELDS[field],
        descending=direction.lower() != "asc"
    )
    return PageSchema[TrafficRecordSchema](
        content=[TrafficRecordSchema.from_entity(r) for r in result.content],
        page_number=result.page_number,
        page_size=result.page_size,
        total_elements=result.total_elements,
        total_pages=result.total_pages,
        last=result.last
    )

@app.get("/api/v1/traffic/total")
def get_total_cars(service: TrafficAnalyticsService = Depends(get_service)) -> int:
    logger.info("Received request to get total number of cars")
    return service.total_count()

@app.get("/api/v1/traffic/daily")
def get_daily_car_counts(service: TrafficAnalyticsService = Depends(get_service)) -> Dict[str, int]:
    logger.info("Received request to get daily car counts")
    return {day.isoformat(): count for day, count in service.daily_totals().items()}

@app.get("/api/v1/traffic/hourly")
def get_hourly_distribution(service: TrafficAnalyticsService = Depends(get_service)) -> Dict[str, int]:
    return {f"{hour:02d}": count for hour, count in service.hourly_distribution().items()}

@app.get("/api/v1/traffic/top-three", response_model=List[TrafficRecordSchema])
def get_top_three_half_hours(service: TrafficAnalyticsService = Depends(get_service)):
    logger.info("Received request to get top 3 half-hour periods with most cars")
    return [TrafficRecordSchema.from_entity(r) for r in service.top_k(3)]

@app.get("/api/v1/traffic/least-cars-period", response_model=List[TrafficRecordSchema])
def get_least_cars_period(service: TrafficAnalyticsService = Depends(get_service)):
    logger.info("Received request to get 1.5 hour period with least cars")
    return [TrafficRecordSchema.from_entity(r) for r in service.min_sum_window(3)]

@app.get("/api/v1/traffic/stats", response_model=StatisticsSchema)
def get_traffic_stats(service: TrafficAnalyticsService = Depends(get_service)):
    return StatisticsSchema.from_entity(service.statistics())

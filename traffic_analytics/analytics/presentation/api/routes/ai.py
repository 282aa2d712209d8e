"""
API for traffic forecasting and pattern explanations.
"""
from datetime import date, datetime
from fastapi import FastAPI, Depends, Query
from fastapi.responses import PlainTextResponse

from ..dependencies import get_service
from ....application.service import TrafficAnalyticsService
from .....common.schemas import ForecastSchema
from .....common.logging import setup_logger

logger = setup_logger(__name__)

app = FastAPI()

@app.get("/api/ai/traffic/predict", response_model=ForecastSchema)
def predict_traffic(start_time: datetime = Query(..., alias="startTime"),
                    end_time: datetime = Query(..., alias="endTime"),
                    service: TrafficAnalyticsService = Depends(get_service)):
    logger.info(f"Predicting traffic from {start_time} to {end_time}")
    return ForecastSchema.from_entity(service.predict(start_time, end_time))

@app.get("/api/ai/traffic/analyze", response_class=PlainTextResponse)
def analyze_traffic_patterns(start_date: date = Query(..., alias="startDate"),
                             end_date: date = Query(..., alias="endDate"),
                             service: TrafficAnalyticsService = Depends(get_service)):
    logger.info(f"Analyzing traffic patterns from {start_date} to {end_date}")
    return service.explain(start_date, end_date)

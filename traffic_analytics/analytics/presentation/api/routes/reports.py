"""
API for traffic reports.
"""
from fastapi import FastAPI, Depends
from fastapi.responses import PlainTextResponse

from ..dependencies import get_service
from ....application.service import TrafficAnalyticsService

app = FastAPI()

@app.get("/api/reports", response_class=PlainTextResponse)
def get_text_report(service: TrafficAnalyticsService = Depends(get_service)):
    return service.text_report()

@app.get("/api/reports/json")
def get_json_report(service: TrafficAnalyticsService = Depends(get_service)):
    return service.structured_report()

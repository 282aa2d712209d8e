"""
Shared service instance for the API routes.
"""
from fastapi import HTTPException
from typing import Optional
from ...application.service import TrafficAnalyticsService

# Singleton
_service: Optional[TrafficAnalyticsService] = None

def init_service(service: TrafficAnalyticsService):
    global _service
    _service = service

def get_service() -> TrafficAnalyticsService:
    if _service is None:
        raise HTTPException(status_code=503, detail="Analytics service not initialized")
    return _service

"""
API package.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routes import traffic, reports, ai
from .dependencies import init_service, get_service
from .errors import register_error_handlers

# Initialize main app
app = FastAPI(title="Automated Traffic Analytics API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(traffic.app.router, tags=["traffic"])
app.include_router(reports.app.router, tags=["reports"])
app.include_router(ai.app.router, tags=["traffic-ai"])

register_error_handlers(app)

__all__ = ["app", "init_service", "get_service"]

from .database import Base, build_engine, build_session_factory, init_db
from .models import TrafficDataDB

__all__ = [
    "Base", "build_engine", "build_session_factory", "init_db",
    "TrafficDataDB"
]

from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, BigInteger
from .database import Base

class TrafficDataDB(Base):
    __tablename__ = "traffic_data"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, unique=True, index=True)
    car_count = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

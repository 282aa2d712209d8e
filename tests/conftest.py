import pytest
from datetime import datetime
from omegaconf import OmegaConf
from traffic_analytics.common.config.manager import ConfigManager
from traffic_analytics.analytics.application import AnalyticsApplicationBuilder
from traffic_analytics.analytics.domain import TrafficRecord
from traffic_analytics.analytics.infrastructure import InMemoryTrafficRecordStore

SAMPLE_TEXT = """2021-12-01T05:00:00 5
2021-12-01T05:30:00 12
2021-12-01T06:00:00 14
2021-12-01T06:30:00 15
2021-12-01T07:00:00 25
2021-12-01T07:30:00 46
2021-12-01T08:00:00 42
2021-12-01T15:00:00 9
2021-12-01T15:30:00 11
2021-12-01T23:30:00 0
2021-12-05T09:30:00 18
2021-12-05T10:30:00 15
2021-12-05T11:30:00 7
2021-12-05T12:30:00 6
2021-12-05T13:30:00 9
2021-12-05T14:30:00 11
2021-12-05T15:30:00 15
2021-12-08T18:00:00 33
2021-12-08T19:00:00 28
2021-12-08T20:00:00 25
2021-12-08T21:00:00 21
2021-12-08T22:00:00 16
2021-12-08T23:00:00 11
2021-12-09T00:00:00 4
"""

def record(ts: str, count: int) -> TrafficRecord:
    return TrafficRecord(timestamp=datetime.fromisoformat(ts), car_count=count)

@pytest.fixture
def store():
    return InMemoryTrafficRecordStore()

@pytest.fixture
def memory_config():
    return ConfigManager().build(OmegaConf.create({
        'store': {'type': 'memory'},
        'forecast': {'lookback_days': 30},
    }))

@pytest.fixture
def service(store, memory_config):
    return AnalyticsApplicationBuilder(memory_config).build_store(store).build_service()

@pytest.fixture
def sample_service(service):
    service.ingest_bulk(SAMPLE_TEXT)
    return service

from dataclasses import dataclass, field
from typing import Optional

@dataclass
class StoreConfig:
    type: str = "memory"  # memory | sql
    url: str = "sqlite:///data/traffic.db"
    echo: bool = False

@dataclass
class ForecastConfig:
    lookback_days: int = 30

@dataclass
class ReportConfig:
    top_k: int = 3
    window_size: int = 3

@dataclass
class SampleDataConfig:
    enabled: bool = False
    path: Optional[str] = "data/sample-data.txt"

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080

@dataclass
class AnalyticsConfig:
    store: StoreConfig = field(default_factory=StoreConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    sample_data: SampleDataConfig = field(default_factory=SampleDataConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

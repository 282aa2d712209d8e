"""
Query surface of the traffic analytics core.
"""
from collections import OrderedDict
from datetime import date, datetime
from typing import List, Optional

from .aggregation import TrafficAggregator
from .explanation import TrafficExplainer
from .forecast import TrafficForecaster
from .ingestion import TrafficIngestor
from .reports import TrafficReportRenderer
from .windows import WindowSearch, DEFAULT_WINDOW_SIZE
from ..domain import Forecast, RecordPage, TrafficRecord, TrafficRecordStore, TrafficStatistics
from ...common.exceptions import InvalidInputError


class TrafficAnalyticsService:
    """
    Facade over ingestion, aggregation, window search, forecasting and reports.
    Reads go straight to the store on every call.
    """
    def __init__(self, store: TrafficRecordStore, ingestor: TrafficIngestor,
                 aggregator: TrafficAggregator, windows: WindowSearch,
                 forecaster: TrafficForecaster, reports: TrafficReportRenderer,
                 explainer: TrafficExplainer):
        self.store = store
        self.ingestor = ingestor
        self.aggregator = aggregator
        self.windows = windows
        self.forecaster = forecaster
        self.reports = reports
        self.explainer = explainer

    # --- Ingestion ---

    def add_record(self, timestamp: datetime, car_count: int) -> TrafficRecord:
        return self.ingestor.add_record(timestamp, car_count)

    def ingest_bulk(self, text: str) -> List[TrafficRecord]:
        return self.ingestor.ingest_bulk(text)

    def list_records(self, page: int = 0, size: int = 10, sort_by: str = "timestamp",
                     descending: bool = True) -> RecordPage:
        if page < 0 or size < 1:
            raise InvalidInputError("Page must be >= 0 and size must be >= 1")
        return self.store.find_page(page, size, sort_by, descending)

    # --- Aggregation ---

    def total_count(self) -> int:
        return self.aggregator.total_count()

    def daily_totals(self) -> "OrderedDict[date, int]":
        return self.aggregator.daily_totals()

    def hourly_distribution(self) -> "OrderedDict[int, int]":
        return self.aggregator.hourly_distribution()

    def peak_hour(self) -> Optional[int]:
        return self.aggregator.peak_hour()

    def statistics(self) -> TrafficStatistics:
        return self.aggregator.statistics()

    # --- Window search ---

    def top_k(self, k: int = 3) -> List[TrafficRecord]:
        return self.windows.top_k(k)

    def min_sum_window(self, window_size: int = DEFAULT_WINDOW_SIZE) -> List[TrafficRecord]:
        return self.windows.min_sum_window(window_size)

    # --- Forecast & reports ---

    def predict(self, start_time: datetime, end_time: datetime) -> Forecast:
        return self.forecaster.predict(start_time, end_time)

    def text_report(self) -> str:
        return self.reports.text_report()

    def structured_report(self) -> "OrderedDict[str, object]":
        return self.reports.structured_report()

    def explain(self, start_date: date, end_date: date) -> str:
        return self.explainer.analyze(start_date, end_date)

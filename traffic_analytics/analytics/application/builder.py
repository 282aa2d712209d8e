from omegaconf import DictConfig
from typing import Optional

from ..domain import TrafficRecordStore
from ..infrastructure import create_store
from .aggregation import TrafficAggregator
from .explanation import TrafficExplainer
from .forecast import TrafficForecaster
from .ingestion import TrafficIngestor
from .reports import TrafficReportRenderer
from .service import TrafficAnalyticsService
from .windows import WindowSearch
from ...common.logging import setup_logger

logger = setup_logger(__name__)

class AnalyticsApplicationBuilder:
    """
    Builder pattern for constructing the analytics service.
    Centralizes component instantiation and wiring.
    """

    def __init__(self, config: DictConfig):
        self.config = config

        # Components
        self.store: Optional[TrafficRecordStore] = None
        self.service: Optional[TrafficAnalyticsService] = None

    def build_store(self, store: Optional[TrafficRecordStore] = None) -> 'AnalyticsApplicationBuilder':
        if store is not None:
            self.store = store
        else:
            logger.info(f"Initializing {self.config.store.type} record store...")
            self.store = create_store(self.config.store)
        return self

    def build_service(self) -> TrafficAnalyticsService:
        if self.store is None:
            self.build_store()

        report_cfg = self.config.get('report', {})
        aggregator = TrafficAggregator(self.store)
        windows = WindowSearch(self.store)
        self.service = TrafficAnalyticsService(
            store=self.store,
            ingestor=TrafficIngestor(self.store),
            aggregator=aggregator,
            windows=windows,
            forecaster=TrafficForecaster(self.store, lookback_days=self.config.forecast.lookback_days),
            reports=TrafficReportRenderer(
                aggregator, windows,
                top_k=report_cfg.get('top_k', 3),
                window_size=report_cfg.get('window_size', 3)
            ),
            explainer=TrafficExplainer(self.store)
        )
        return self.service

    def load_sample_data(self) -> int:
        sample_cfg = self.config.get('sample_data', {})
        if not sample_cfg.get('enabled', False) or not sample_cfg.get('path'):
            return 0
        if self.service is None:
            self.build_service()
        return self.service.ingestor.load_sample_data(sample_cfg.path)

import os
from omegaconf import DictConfig, OmegaConf
from typing import Optional

from conf.config_models import AnalyticsConfig
from ..exceptions import ConfigurationError

class ConfigManager:
    """Centralizes loading and validation of the analytics configuration."""

    REQUIRED_KEYS = ('store', 'forecast')
    STORE_TYPES = ('memory', 'sql')

    def build(self, overrides: Optional[DictConfig] = None) -> DictConfig:
        """Merges overrides onto the schema, applies env overrides and validates."""
        cfg = OmegaConf.structured(AnalyticsConfig)
        if overrides is not None:
            for key in self.REQUIRED_KEYS:
                if key not in overrides:
                    raise ConfigurationError(f"Missing required config key: {key}")
            cfg = OmegaConf.merge(cfg, overrides)

        database_url = os.getenv("DATABASE_URL")
        if database_url:
            cfg.store.url = database_url

        if cfg.store.type not in self.STORE_TYPES:
            raise ConfigurationError(f"Unknown store type: {cfg.store.type}")
        if cfg.forecast.lookback_days <= 0:
            raise ConfigurationError("forecast.lookback_days must be positive")
        return cfg

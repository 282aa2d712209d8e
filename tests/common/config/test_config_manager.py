import pytest
from omegaconf import OmegaConf
from traffic_analytics.common.config.manager import ConfigManager
from traffic_analytics.common.exceptions import ConfigurationError

def test_build_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    cfg = ConfigManager().build()
    assert cfg.store.type == "memory"
    assert cfg.forecast.lookback_days == 30
    assert cfg.report.top_k == 3

def test_database_url_env_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/traffic")
    cfg = ConfigManager().build(OmegaConf.create({'store': {'type': 'sql'}, 'forecast': {}}))
    assert cfg.store.url == "postgresql://localhost/traffic"

def test_missing_required_key():
    with pytest.raises(ConfigurationError):
        ConfigManager().build(OmegaConf.create({'store': {'type': 'memory'}}))

def test_unknown_store_type():
    with pytest.raises(ConfigurationError):
        ConfigManager().build(OmegaConf.create({'store': {'type': 'redis'}, 'forecast': {}}))

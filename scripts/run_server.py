import os
import sys
import hydra
import logging
import uvicorn
from omegaconf import DictConfig

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from traffic_analytics.common.config.manager import ConfigManager
from traffic_analytics.common.logging import setup_logger, set_package_level
from traffic_analytics.analytics.application import AnalyticsApplicationBuilder
from traffic_analytics.analytics.presentation.api import app, init_service

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    analytics_cfg = ConfigManager().build(cfg.analytics)
    level = getattr(logging, analytics_cfg.log_level.upper(), logging.INFO)
    set_package_level(level)
    logger = setup_logger("run_server", level=level)
    logger.info("Configuration loaded.")

    builder = AnalyticsApplicationBuilder(analytics_cfg)
    service = builder.build_service()
    builder.load_sample_data()
    init_service(service)

    server_cfg = analytics_cfg.server
    logger.info(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)

if __name__ == "__main__":
    main()

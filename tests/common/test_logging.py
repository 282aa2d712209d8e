import logging
import pytest
from traffic_analytics.common.logging import LOG_FORMAT, setup_logger, log_execution_time, set_package_level

def test_setup_logger_adds_single_handler():
    logger = setup_logger("traffic_analytics.test_handlers")
    setup_logger("traffic_analytics.test_handlers")
    assert len(logger.handlers) == 1

def test_log_execution_time_reraises_and_logs(caplog):
    logger = logging.getLogger("traffic_analytics.test_timing")

    @log_execution_time(logger)
    def failing():
        raise ValueError("boom")

    with caplog.at_level(logging.ERROR, logger="traffic_analytics.test_timing"):
        with pytest.raises(ValueError):
            failing()
    assert "failing failed: boom" in caplog.text

def test_log_execution_time_returns_result():
    @log_execution_time(logging.getLogger("traffic_analytics.test_timing"))
    def answer():
        return 42

    assert answer() == 42
    assert answer.__name__ == "answer"

def test_set_package_level():
    logger = setup_logger("traffic_analytics.test_levels")
    set_package_level(logging.DEBUG)
    assert logger.level == logging.DEBUG
    set_package_level(logging.INFO)

def test_setup_logger_uses_shared_format():
    logger = setup_logger("traffic_analytics.test_format")
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT
    assert logger.level == logging.INFO

import logging
import time
from functools import wraps
from typing import Callable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Returns the module logger, attaching a stream handler on first use.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

def log_execution_time(logger: logging.Logger):
    """
    Decorator that logs how long a query took at debug level.
    Failures are logged with traceback and re-raised.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} failed: {e}", exc_info=True)
                raise
            elapsed = time.perf_counter() - start
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"{func.__name__} executed in {elapsed * 1000:.2f}ms")
            return result
        return wrapper
    return decorator

def set_package_level(level: int, prefix: str = "traffic_analytics"):
    """
    Applies a level to every logger already created under `prefix`.
    """
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)

from datetime import datetime
from typing import Optional


class TrafficAnalyticsError(Exception):
    """Base exception for all traffic analytics errors."""
    error_code = "TRAFFIC_ERROR"


class InvalidInputError(TrafficAnalyticsError):
    """Raised when a timestamp is missing or a count is negative."""
    error_code = "INVALID_INPUT"


class DuplicateTimestampError(TrafficAnalyticsError):
    """Raised when a record already exists at the given instant."""
    error_code = "DUPLICATE_TIMESTAMP"

    def __init__(self, timestamp: datetime):
        self.timestamp = timestamp
        super().__init__(f"Traffic data already exists for timestamp: {timestamp.isoformat()}")


class MalformedLineError(TrafficAnalyticsError):
    """Raised when a bulk ingestion line cannot be parsed."""
    error_code = "MALFORMED_LINE"

    def __init__(self, line: str, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Invalid line format{where}: {line}")


class InsufficientHistoryError(TrafficAnalyticsError):
    """Raised when a forecast is requested without historical samples."""
    error_code = "INSUFFICIENT_HISTORY"


class StoreUnavailableError(TrafficAnalyticsError):
    """Raised when the record store fails for reasons other than uniqueness."""
    error_code = "STORE_UNAVAILABLE"


class ConfigurationError(TrafficAnalyticsError):
    """Raised when configuration is invalid."""
    error_code = "CONFIGURATION_ERROR"

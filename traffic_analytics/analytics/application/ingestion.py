"""
Validation and ingestion of vehicle-count samples.
"""
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..domain import TrafficRecord, TrafficRecordStore
from ...common.exceptions import InvalidInputError, MalformedLineError
from ...common.logging import setup_logger

logger = setup_logger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")
FIELD_SPLIT = re.compile(r"\s+")
COUNT_PATTERN = re.compile(r"[0-9]+")
# YYYY-MM-DDTHH:MM[:SS[.fff[fff]]], no offset
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{3}(\d{3})?)?)?", re.ASCII)


def validate_sample(timestamp: Optional[datetime], car_count) -> None:
    if timestamp is None:
        raise InvalidInputError("Timestamp cannot be null")
    if not isinstance(timestamp, datetime):
        raise InvalidInputError(f"Timestamp must be a datetime, got {type(timestamp).__name__}")
    if timestamp.tzinfo is not None:
        raise InvalidInputError("Timestamp must be a local date-time")
    if isinstance(car_count, bool) or not isinstance(car_count, int):
        raise InvalidInputError("Car count must be an integer")
    if car_count < 0:
        raise InvalidInputError("Car count cannot be negative")


def parse_line(line: str, line_number: Optional[int] = None) -> TrafficRecord:
    """
    Parses `<ISO-8601 date-time><whitespace><non-negative integer>`.
    """
    parts = FIELD_SPLIT.split(line.strip())
    if len(parts) != 2 or not COUNT_PATTERN.fullmatch(parts[1]):
        raise MalformedLineError(line, line_number)
    if not TIMESTAMP_PATTERN.fullmatch(parts[0]):
        raise MalformedLineError(line, line_number)
    try:
        timestamp = datetime.fromisoformat(parts[0])
    except ValueError as e:
        raise MalformedLineError(line, line_number) from e
    return TrafficRecord(timestamp=timestamp, car_count=int(parts[1]))


def parse_bulk(text: str) -> List[TrafficRecord]:
    records = []
    for number, line in enumerate(LINE_SPLIT.split(text), start=1):
        if not line.strip():
            continue
        records.append(parse_line(line, number))
    return records


class TrafficIngestor:
    """
    Validates samples and writes them to the store.
    """
    def __init__(self, store: TrafficRecordStore):
        self.store = store

    def add_record(self, timestamp: datetime, car_count: int) -> TrafficRecord:
        logger.debug(f"Saving traffic data - Timestamp: {timestamp}, Car Count: {car_count}")
        validate_sample(timestamp, car_count)
        return self.store.save(TrafficRecord(timestamp=timestamp, car_count=car_count))

    def ingest_bulk(self, text: str) -> List[TrafficRecord]:
        """
        Parses every line before writing anything, then commits the batch
        in one call. A malformed line or a duplicate leaves the store unchanged.
        """
        records = parse_bulk(text)
        if not records:
            logger.info("Bulk ingestion received no records")
            return []
        stored = self.store.save_all(records)
        logger.info(f"Ingested {len(stored)} traffic records")
        return stored

    def load_sample_data(self, path: Union[str, Path]) -> int:
        """
        Seeds an empty store from a bulk-format file.
        Returns the number of records loaded.
        """
        if self.store.count() > 0:
            logger.info("Store already holds traffic data, skipping sample data")
            return 0
        path = Path(path)
        if not path.exists():
            logger.warning(f"Could not load sample data: {path} not found")
            return 0
        logger.info(f"Loading sample traffic data from {path}...")
        stored = self.ingest_bulk(path.read_text(encoding="utf-8"))
        logger.info(f"Loaded {len(stored)} traffic data records")
        return len(stored)

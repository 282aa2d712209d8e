"""
Domain repositories for the Traffic Analytics module.
"""
from datetime import datetime
from typing import Iterable, List, Protocol
from .entities import TrafficRecord, RecordPage

class TrafficRecordStore(Protocol):
    """
    Persistence capabilities the analytics core needs.

    `save` and `save_all` must check timestamp uniqueness and insert as a
    single atomic operation, raising DuplicateTimestampError on conflict.
    `save_all` commits every record or none.
    """
    def save(self, record: TrafficRecord) -> TrafficRecord:
        ...

    def save_all(self, records: Iterable[TrafficRecord]) -> List[TrafficRecord]:
        ...

    def find_all(self) -> List[TrafficRecord]:
        ...

    def find_all_ordered_by_timestamp(self) -> List[TrafficRecord]:
        ...

    def find_by_timestamp_range(self, start: datetime, end: datetime) -> List[TrafficRecord]:
        """Records with start <= timestamp < end."""
        ...

    def find_top_by_count(self, k: int) -> List[TrafficRecord]:
        """Highest car_count first, ties by earliest timestamp."""
        ...

    def count(self) -> int:
        ...

    def find_page(self, page: int, size: int, sort_by: str = "timestamp",
                  descending: bool = True) -> RecordPage:
        ...

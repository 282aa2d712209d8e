"""
Ranking and fixed-length window search over records.
"""
from typing import List, Sequence

from ..domain import TrafficRecord, TrafficRecordStore
from ...common.exceptions import InvalidInputError
from ...common.logging import setup_logger

logger = setup_logger(__name__)

DEFAULT_WINDOW_SIZE = 3


def rank_by_count(records: Sequence[TrafficRecord], k: int) -> List[TrafficRecord]:
    """The k busiest records, ties broken by earliest timestamp."""
    if k < 0:
        raise InvalidInputError("k cannot be negative")
    return sorted(records, key=lambda r: (-r.car_count, r.timestamp))[:k]


def min_sum_slice(records: Sequence[TrafficRecord], window_size: int) -> List[TrafficRecord]:
    """
    Contiguous slice of exactly `window_size` records with the smallest sum.
    `records` must already be in ascending timestamp order. The earliest
    slice wins a tie. Shorter inputs come back whole.
    """
    if window_size < 1:
        raise InvalidInputError("Window size must be at least 1")
    if len(records) < window_size:
        return list(records)

    window_sum = sum(r.car_count for r in records[:window_size])
    min_sum, min_index = window_sum, 0
    for i in range(1, len(records) - window_size + 1):
        window_sum += records[i + window_size - 1].car_count - records[i - 1].car_count
        if window_sum < min_sum:
            min_sum, min_index = window_sum, i
    return list(records[min_index:min_index + window_size])


class WindowSearch:
    def __init__(self, store: TrafficRecordStore):
        self.store = store

    def top_k(self, k: int = 3) -> List[TrafficRecord]:
        logger.debug(f"Retrieving top {k} records by car count")
        if k < 0:
            raise InvalidInputError("k cannot be negative")
        if k == 0:
            return []
        return rank_by_count(self.store.find_top_by_count(k), k)

    def min_sum_window(self, window_size: int = DEFAULT_WINDOW_SIZE) -> List[TrafficRecord]:
        logger.debug(f"Searching least busy window of {window_size} records")
        if window_size < 1:
            raise InvalidInputError("Window size must be at least 1")
        return min_sum_slice(self.store.find_all_ordered_by_timestamp(), window_size)

"""
Totals and time-of-day grouping over the full record set.
Every query recomputes from the store; nothing is cached.
"""
from collections import OrderedDict, defaultdict
from datetime import date
from typing import Iterable, Optional

from ..domain import TrafficRecord, TrafficRecordStore, TrafficStatistics
from ...common.logging import setup_logger, log_execution_time

logger = setup_logger(__name__)


def sum_counts(records: Iterable[TrafficRecord]) -> int:
    return sum(r.car_count for r in records)


def group_by_day(records: Iterable[TrafficRecord]) -> "OrderedDict[date, int]":
    """Per-date sums ordered by ascending date."""
    totals = defaultdict(int)
    for record in records:
        totals[record.timestamp.date()] += record.car_count
    return OrderedDict(sorted(totals.items()))


def group_by_hour(records: Iterable[TrafficRecord]) -> "OrderedDict[int, int]":
    """Per hour-of-day sums across all dates, ordered by hour."""
    totals = defaultdict(int)
    for record in records:
        totals[record.timestamp.hour] += record.car_count
    return OrderedDict(sorted(totals.items()))


def busiest_hour(distribution: "OrderedDict[int, int]") -> Optional[int]:
    """Hour with the highest total; the lowest hour wins a tie."""
    peak = None
    for hour, total in distribution.items():
        if peak is None or total > distribution[peak]:
            peak = hour
    return peak


class TrafficAggregator:
    def __init__(self, store: TrafficRecordStore):
        self.store = store

    @log_execution_time(logger)
    def total_count(self) -> int:
        records = self.store.find_all()
        if not records:
            logger.info("No traffic data found")
        return sum_counts(records)

    @log_execution_time(logger)
    def daily_totals(self) -> "OrderedDict[date, int]":
        return group_by_day(self.store.find_all())

    @log_execution_time(logger)
    def hourly_distribution(self) -> "OrderedDict[int, int]":
        return group_by_hour(self.store.find_all())

    def peak_hour(self) -> Optional[int]:
        return busiest_hour(self.hourly_distribution())

    @log_execution_time(logger)
    def statistics(self) -> TrafficStatistics:
        records = self.store.find_all()
        daily = group_by_day(records)
        hourly = group_by_hour(records)
        peak = busiest_hour(hourly)

        # Mean of the per-day sums, not of the raw samples
        average_per_day = sum(daily.values()) / len(daily) if daily else 0.0

        return TrafficStatistics(
            total_cars=sum_counts(records),
            average_cars_per_day=average_per_day,
            total_records=len(records),
            peak_hour=peak,
            cars_in_peak_hour=hourly[peak] if peak is not None else None
        )

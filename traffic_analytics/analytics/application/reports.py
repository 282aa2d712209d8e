"""
Text and structured views over aggregation and window results.
"""
from collections import OrderedDict
from datetime import datetime
from typing import Dict, List

from .aggregation import TrafficAggregator
from .windows import WindowSearch
from ..domain import TrafficRecord

TOP_K = 3
WINDOW_SIZE = 3


def format_timestamp(timestamp: datetime) -> str:
    """ISO-8601 local date-time, seconds omitted when they are zero."""
    if timestamp.second == 0 and timestamp.microsecond == 0:
        return timestamp.strftime("%Y-%m-%dT%H:%M")
    return timestamp.isoformat()


def record_to_dict(record: TrafficRecord) -> Dict[str, object]:
    return {"timestamp": format_timestamp(record.timestamp), "carCount": record.car_count}


def _record_lines(records: List[TrafficRecord]) -> List[str]:
    return [f"{format_timestamp(r.timestamp)} {r.car_count}" for r in records]


class TrafficReportRenderer:
    def __init__(self, aggregator: TrafficAggregator, windows: WindowSearch,
                 top_k: int = TOP_K, window_size: int = WINDOW_SIZE):
        self.aggregator = aggregator
        self.windows = windows
        self.top_k = top_k
        self.window_size = window_size

    def text_report(self) -> str:
        lines = [f"Total cars seen: {self.aggregator.total_count()}", ""]

        lines.append("Daily car counts:")
        for day, count in self.aggregator.daily_totals().items():
            lines.append(f"{day.isoformat()} {count}")

        lines.append("")
        lines.append(f"Top {self.top_k} half hours with most cars:")
        lines.extend(_record_lines(self.windows.top_k(self.top_k)))

        lines.append("")
        hours = self.window_size * 0.5
        lines.append(
            f"{hours:g} hour period with least cars "
            f"({self.window_size} contiguous half-hour records):"
        )
        lines.extend(_record_lines(self.windows.min_sum_window(self.window_size)))

        return "\n".join(lines) + "\n"

    def structured_report(self) -> "OrderedDict[str, object]":
        report = OrderedDict()
        report["totalCars"] = self.aggregator.total_count()
        report["dailyCounts"] = OrderedDict(
            (day.isoformat(), count) for day, count in self.aggregator.daily_totals().items()
        )
        report["topThreeHalfHours"] = [record_to_dict(r) for r in self.windows.top_k(self.top_k)]
        report["leastCarsPeriod"] = [
            record_to_dict(r) for r in self.windows.min_sum_window(self.window_size)
        ]
        return report

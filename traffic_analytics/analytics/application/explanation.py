"""
Natural-language summaries of traffic patterns.

The language model itself is an external collaborator reached through
`ExplanationClient`; nothing computed by the analytics core depends on
its output.
"""
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Protocol

from ..domain import TrafficRecord, TrafficRecordStore
from ...common.exceptions import InvalidInputError
from ...common.logging import setup_logger

logger = setup_logger(__name__)

NO_DATA_MESSAGE = "No traffic data available for the specified period."
FALLBACK_MESSAGE = "Unable to analyze traffic patterns at this time. Please try again later."
SAMPLE_SIZE = 5
WEEKDAYS = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]

ANALYSIS_PROMPT = """You are a traffic analyst. Summarize the traffic patterns observed between {startDate} and {endDate}.

Records: {totalRecords}
Total cars: {totalCars}
Average cars per interval: {averageCarsPerInterval}

Sample data:
{sampleData}

Average cars by day of week:
{dailyAverages}

Average cars by hour of day:
{hourlyAverages}

Describe peak periods, quiet periods and any notable trends in a few short paragraphs."""


class ExplanationClient(Protocol):
    def complete(self, prompt: str) -> str:
        ...


def _averages(records: List[TrafficRecord], key) -> Dict:
    buckets = defaultdict(list)
    for record in records:
        buckets[key(record)].append(record.car_count)
    return {k: sum(v) / len(v) for k, v in buckets.items()}


def build_analysis_context(records: List[TrafficRecord], start_date: date, end_date: date) -> Dict[str, object]:
    total = sum(r.car_count for r in records)
    average = total / len(records) if records else 0.0

    sample = "\n".join(
        f"- {r.timestamp.isoformat()}: {r.car_count} cars" for r in records[:SAMPLE_SIZE]
    )
    by_weekday = _averages(records, lambda r: r.timestamp.weekday())
    daily = "\n".join(
        f"- {WEEKDAYS[day]}: {avg:.1f} cars" for day, avg in sorted(by_weekday.items())
    )
    by_hour = _averages(records, lambda r: r.timestamp.hour)
    hourly = "\n".join(
        f"- {hour:02d}:00 - {avg:.1f} cars" for hour, avg in sorted(by_hour.items())
    )

    return {
        "startDate": start_date.isoformat(),
        "endDate": end_date.isoformat(),
        "totalRecords": len(records),
        "totalCars": total,
        "averageCarsPerInterval": f"{average:.1f}",
        "sampleData": sample,
        "dailyAverages": daily,
        "hourlyAverages": hourly,
    }


def render_prompt(context: Dict[str, object]) -> str:
    return ANALYSIS_PROMPT.format(**context)


class TrafficExplainer:
    def __init__(self, store: TrafficRecordStore, client: Optional[ExplanationClient] = None):
        self.store = store
        self.client = client

    def analyze(self, start_date: date, end_date: date) -> str:
        if start_date is None or end_date is None:
            raise InvalidInputError("Start date and end date are required")
        if start_date > end_date:
            raise InvalidInputError("Start date must be before or equal to end date")

        records = self.store.find_by_timestamp_range(
            datetime.combine(start_date, time.min),
            datetime.combine(end_date + timedelta(days=1), time.min)
        )
        if not records:
            return NO_DATA_MESSAGE
        if self.client is None:
            logger.warning("No explanation client configured")
            return FALLBACK_MESSAGE

        prompt = render_prompt(build_analysis_context(records, start_date, end_date))
        try:
            return self.client.complete(prompt)
        except Exception as e:
            # Collaborator failures map to the fixed fallback text
            logger.error(f"Error analyzing traffic patterns: {e}", exc_info=True)
            return FALLBACK_MESSAGE

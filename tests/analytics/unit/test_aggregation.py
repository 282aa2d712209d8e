from collections import OrderedDict
from datetime import date, datetime
from traffic_analytics.analytics.application.aggregation import (
    group_by_day, group_by_hour, busiest_hour
)
from conftest import record

def test_empty_store_aggregates(service):
    assert service.total_count() == 0
    assert service.daily_totals() == OrderedDict()
    assert service.hourly_distribution() == OrderedDict()
    assert service.peak_hour() is None

    stats = service.statistics()
    assert stats.total_cars == 0
    assert stats.average_cars_per_day == 0.0
    assert stats.total_records == 0
    assert stats.peak_hour is None
    assert stats.cars_in_peak_hour is None
    assert stats.peak_hour_label is None

def test_total_count(sample_service):
    assert sample_service.total_count() == 398

def test_daily_totals_ordered_by_date(sample_service):
    daily = sample_service.daily_totals()
    assert list(daily.items()) == [
        (date(2021, 12, 1), 179),
        (date(2021, 12, 5), 81),
        (date(2021, 12, 8), 134),
        (date(2021, 12, 9), 4),
    ]

def test_daily_totals_sum_matches_total(sample_service):
    assert sum(sample_service.daily_totals().values()) == sample_service.total_count()

def test_daily_totals_ignore_insertion_order(service):
    service.add_record(datetime(2023, 1, 3, 10, 0), 1)
    service.add_record(datetime(2023, 1, 1, 10, 0), 2)
    service.add_record(datetime(2023, 1, 2, 10, 0), 3)
    assert list(service.daily_totals().keys()) == [date(2023, 1, 1), date(2023, 1, 2), date(2023, 1, 3)]

def test_hourly_distribution(sample_service):
    hourly = sample_service.hourly_distribution()
    assert list(hourly.keys()) == sorted(hourly.keys())
    assert hourly[7] == 71
    assert hourly[15] == 35
    assert hourly[23] == 11
    assert hourly[0] == 4
    assert 1 not in hourly

def test_peak_hour(sample_service):
    assert sample_service.peak_hour() == 7

def test_peak_hour_tie_goes_to_lowest_hour():
    distribution = group_by_hour([
        record("2023-01-01T18:00:00", 20),
        record("2023-01-01T06:00:00", 20),
        record("2023-01-01T12:00:00", 5),
    ])
    assert busiest_hour(distribution) == 6

def test_statistics(sample_service):
    stats = sample_service.statistics()
    assert stats.total_cars == 398
    assert stats.total_records == 24
    # Mean of four daily totals, not of 24 samples
    assert stats.average_cars_per_day == 99.5
    assert stats.peak_hour == 7
    assert stats.cars_in_peak_hour == 71
    assert stats.peak_hour_label == "07:00 - 07:59"

def test_group_by_day_uses_local_date():
    daily = group_by_day([
        record("2023-01-01T23:59:00", 4),
        record("2023-01-02T00:00:00", 6),
    ])
    assert daily == OrderedDict([(date(2023, 1, 1), 4), (date(2023, 1, 2), 6)])

import pytest
from datetime import datetime, timezone
from traffic_analytics.analytics.application.ingestion import TrafficIngestor, parse_line, parse_bulk
from traffic_analytics.common.exceptions import (
    InvalidInputError, DuplicateTimestampError, MalformedLineError
)

def test_add_record_increases_total(service):
    service.add_record(datetime(2023, 1, 1, 12, 0), 10)
    before = service.total_count()
    stored = service.add_record(datetime(2023, 1, 1, 12, 30), 7)
    assert service.total_count() == before + 7
    assert stored.id is not None
    assert stored.car_count == 7
    assert stored.recorded_at is not None

def test_add_record_zero_count_allowed(service):
    service.add_record(datetime(2023, 1, 1, 12, 0), 0)
    assert service.total_count() == 0
    assert service.store.count() == 1

def test_add_record_rejects_missing_timestamp(service):
    with pytest.raises(InvalidInputError):
        service.add_record(None, 5)

def test_add_record_rejects_negative_count(service):
    with pytest.raises(InvalidInputError):
        service.add_record(datetime(2023, 1, 1), -1)
    assert service.store.count() == 0

def test_add_record_rejects_duplicate_timestamp(service):
    ts = datetime(2023, 1, 1, 12, 0)
    service.add_record(ts, 10)
    with pytest.raises(DuplicateTimestampError) as exc_info:
        service.add_record(ts, 99)
    assert exc_info.value.timestamp == ts
    assert service.total_count() == 10

def test_ingest_bulk_two_lines(service):
    stored = service.ingest_bulk("2023-01-01T12:00:00 10\n2023-01-01T12:30:00 20")
    assert len(stored) == 2
    assert service.total_count() == 30
    assert service.store.count() == 2

def test_ingest_bulk_skips_blank_lines_and_crlf(service):
    stored = service.ingest_bulk("\r\n2023-01-01T12:00:00   10\r\n\r\n   \n2023-01-01T12:30\t20\n")
    assert [r.car_count for r in stored] == [10, 20]

@pytest.mark.parametrize("line", [
    "2023-01-01T12:00:00",
    "2023-01-01T12:00:00 10 extra",
    "not-a-date 10",
    "2023-01-01T12:00:00 -5",
    "2023-01-01T12:00:00 1.5",
    "2023-01-01 10",
    "2023-01-01T12:00:00+02:00 10",
    "2023-01-01T12:00:00Z 10",
    "2023-01-01T12 10",
    "20230101T1200 10",
    "2023-01-01T12:00:00.1 10",
])
def test_parse_line_rejects_malformed(line):
    with pytest.raises(MalformedLineError) as exc_info:
        parse_line(line)
    assert exc_info.value.line == line

def test_parse_line_valid():
    parsed = parse_line("  2023-01-01T12:00:00 42  ")
    assert parsed.timestamp == datetime(2023, 1, 1, 12, 0)
    assert parsed.car_count == 42

def test_parse_bulk_reports_line_number():
    with pytest.raises(MalformedLineError) as exc_info:
        parse_bulk("2023-01-01T12:00:00 10\n\nbroken line")
    assert exc_info.value.line_number == 3
    assert "broken line" in str(exc_info.value)

def test_ingest_bulk_is_atomic_on_malformed_line(service):
    service.add_record(datetime(2022, 12, 31, 23, 0), 3)
    with pytest.raises(MalformedLineError):
        service.ingest_bulk("2023-01-01T12:00:00 10\ngarbage\n2023-01-01T13:00:00 5")
    assert service.store.count() == 1
    assert service.total_count() == 3

def test_ingest_bulk_is_atomic_on_duplicate_in_store(service):
    service.add_record(datetime(2023, 1, 1, 12, 30), 3)
    with pytest.raises(DuplicateTimestampError):
        service.ingest_bulk("2023-01-01T12:00:00 10\n2023-01-01T12:30:00 20")
    assert service.store.count() == 1
    assert service.total_count() == 3

def test_ingest_bulk_is_atomic_on_duplicate_in_batch(service):
    with pytest.raises(DuplicateTimestampError):
        service.ingest_bulk("2023-01-01T12:00:00 10\n2023-01-01T12:00:00 20")
    assert service.store.count() == 0

def test_ingest_bulk_empty_text(service):
    assert service.ingest_bulk("\n\n") == []

def test_load_sample_data(store, tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text("2023-01-01T12:00:00 10\n2023-01-01T12:30:00 20\n")
    ingestor = TrafficIngestor(store)
    assert ingestor.load_sample_data(path) == 2
    # Second run leaves a populated store alone
    assert ingestor.load_sample_data(path) == 0
    assert store.count() == 2

def test_load_sample_data_missing_file(store, tmp_path):
    assert TrafficIngestor(store).load_sample_data(tmp_path / "missing.txt") == 0
    assert store.count() == 0

def test_add_record_rejects_aware_timestamp(service):
    service.add_record(datetime(2023, 1, 1, 12, 0), 10)
    with pytest.raises(InvalidInputError):
        service.add_record(datetime(2023, 1, 1, 13, 0, tzinfo=timezone.utc), 5)
    assert service.store.count() == 1
    # Reads that order timestamps keep working
    assert [r.car_count for r in service.min_sum_window(3)] == [10]
    assert service.text_report().startswith("Total cars seen: 10")

def test_parse_line_accepts_fractional_seconds():
    assert parse_line("2023-01-01T12:00:00.250 3").timestamp == datetime(2023, 1, 1, 12, 0, 0, 250000)
    assert parse_line("2023-01-01T12:00:00.000001 3").timestamp.microsecond == 1

import threading
from datetime import datetime
from typing import Dict, Iterable, List
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..domain import TrafficRecordStore, TrafficRecord, RecordPage
from ...common.database import TrafficDataDB
from ...common.exceptions import DuplicateTimestampError, InvalidInputError, StoreUnavailableError
from ...common.logging import setup_logger

logger = setup_logger(__name__)

SORTABLE_FIELDS = ('id', 'timestamp', 'car_count', 'recorded_at')


def _check_sort_field(sort_by: str):
    if sort_by not in SORTABLE_FIELDS:
        raise InvalidInputError(f"Cannot sort by '{sort_by}'. Expected one of {', '.join(SORTABLE_FIELDS)}")


def _top_order(record: TrafficRecord):
    return (-record.car_count, record.timestamp)


class InMemoryTrafficRecordStore(TrafficRecordStore):
    """
    Keeps records in a dict keyed by timestamp.
    The uniqueness check and the insert run under one lock.
    """
    def __init__(self):
        self._records: Dict[datetime, TrafficRecord] = {}
        self._lock = threading.Lock()
        self._next_id = 1

    def _insert(self, record: TrafficRecord) -> TrafficRecord:
        stored = record.with_id(self._next_id)
        self._next_id += 1
        self._records[stored.timestamp] = stored
        return stored

    def save(self, record: TrafficRecord) -> TrafficRecord:
        with self._lock:
            if record.timestamp in self._records:
                raise DuplicateTimestampError(record.timestamp)
            return self._insert(record)

    def save_all(self, records: Iterable[TrafficRecord]) -> List[TrafficRecord]:
        records = list(records)
        with self._lock:
            seen = set()
            for record in records:
                if record.timestamp in self._records or record.timestamp in seen:
                    raise DuplicateTimestampError(record.timestamp)
                seen.add(record.timestamp)
            return [self._insert(record) for record in records]

    def _snapshot(self) -> List[TrafficRecord]:
        with self._lock:
            return list(self._records.values())

    def find_all(self) -> List[TrafficRecord]:
        return sorted(self._snapshot(), key=lambda r: r.id)

    def find_all_ordered_by_timestamp(self) -> List[TrafficRecord]:
        return sorted(self._snapshot(), key=lambda r: r.timestamp)

    def find_by_timestamp_range(self, start: datetime, end: datetime) -> List[TrafficRecord]:
        return [r for r in self.find_all_ordered_by_timestamp() if start <= r.timestamp < end]

    def find_top_by_count(self, k: int) -> List[TrafficRecord]:
        return sorted(self._snapshot(), key=_top_order)[:max(k, 0)]

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def find_page(self, page: int, size: int, sort_by: str = "timestamp",
                  descending: bool = True) -> RecordPage:
        _check_sort_field(sort_by)
        ordered = sorted(self._snapshot(), key=lambda r: getattr(r, sort_by), reverse=descending)
        start = page * size
        return RecordPage(
            content=ordered[start:start + size],
            page_number=page,
            page_size=size,
            total_elements=len(ordered)
        )


class SqlAlchemyTrafficRecordStore(TrafficRecordStore):
    """
    Stores records in the `traffic_data` table.
    Timestamp uniqueness is enforced by the table's unique constraint.
    """
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(row: TrafficDataDB) -> TrafficRecord:
        return TrafficRecord(
            timestamp=row.timestamp,
            car_count=row.car_count,
            recorded_at=row.created_at,
            id=row.id
        )

    @staticmethod
    def _to_row(record: TrafficRecord) -> TrafficDataDB:
        return TrafficDataDB(
            timestamp=record.timestamp,
            car_count=record.car_count,
            created_at=record.recorded_at
        )

    def _insert(self, records: List[TrafficRecord]) -> List[TrafficRecord]:
        session = self.session_factory()
        try:
            rows = [self._to_row(r) for r in records]
            session.add_all(rows)
            session.commit()
            return [self._to_entity(row) for row in rows]
        except IntegrityError as e:
            session.rollback()
            duplicate = self._find_conflict(session, records)
            raise DuplicateTimestampError(duplicate) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to store {len(records)} traffic records: {e}")
            raise StoreUnavailableError(str(e)) from e
        finally:
            session.close()

    @staticmethod
    def _find_conflict(session, records: List[TrafficRecord]) -> datetime:
        seen = set()
        for record in records:
            if record.timestamp in seen:
                return record.timestamp
            seen.add(record.timestamp)
        existing = session.execute(
            select(TrafficDataDB.timestamp).where(TrafficDataDB.timestamp.in_(seen))
        ).scalars().first()
        return existing if existing is not None else records[0].timestamp

    def save(self, record: TrafficRecord) -> TrafficRecord:
        return self._insert([record])[0]

    def save_all(self, records: Iterable[TrafficRecord]) -> List[TrafficRecord]:
        records = list(records)
        if not records:
            return []
        return self._insert(records)

    def _query(self, statement) -> List[TrafficRecord]:
        try:
            with self.session_factory() as session:
                rows = session.execute(statement).scalars().all()
                return [self._to_entity(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(str(e)) from e

    def find_all(self) -> List[TrafficRecord]:
        return self._query(select(TrafficDataDB).order_by(TrafficDataDB.id))

    def find_all_ordered_by_timestamp(self) -> List[TrafficRecord]:
        return self._query(select(TrafficDataDB).order_by(TrafficDataDB.timestamp.asc()))

    def find_by_timestamp_range(self, start: datetime, end: datetime) -> List[TrafficRecord]:
        return self._query(
            select(TrafficDataDB)
            .where(TrafficDataDB.timestamp >= start, TrafficDataDB.timestamp < end)
            .order_by(TrafficDataDB.timestamp.asc())
        )

    def find_top_by_count(self, k: int) -> List[TrafficRecord]:
        return self._query(
            select(TrafficDataDB)
            .order_by(TrafficDataDB.car_count.desc(), TrafficDataDB.timestamp.asc())
            .limit(max(k, 0))
        )

    def count(self) -> int:
        try:
            with self.session_factory() as session:
                return session.execute(select(func.count(TrafficDataDB.id))).scalar_one()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(str(e)) from e

    def find_page(self, page: int, size: int, sort_by: str = "timestamp",
                  descending: bool = True) -> RecordPage:
        _check_sort_field(sort_by)
        column = getattr(TrafficDataDB, 'created_at' if sort_by == 'recorded_at' else sort_by)
        content = self._query(
            select(TrafficDataDB)
            .order_by(column.desc() if descending else column.asc())
            .offset(page * size)
            .limit(size)
        )
        return RecordPage(
            content=content,
            page_number=page,
            page_size=size,
            total_elements=self.count()
        )

"""
Record store for blood pressure readings.

The store wraps a SQLAlchemy session rather than a module-level handle, so
an app (or a test) owns exactly the store it builds.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy import func, select, delete
from sqlalchemy.exc import SQLAlchemyError

from bp_tracker.errors import InvalidParameter, PersistenceError
from bp_tracker.models.reading import BloodPressureReading, utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 1000

# Largest value SQLite stores in an INTEGER column
MAX_SQL_INT = 2 ** 63 - 1


@dataclass
class ReadingPage:
    records: List[BloodPressureReading] = field(default_factory=list)
    total: int = 0


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_page_options(limit, offset, since_days):
    """Check pagination options; the first bad parameter raises."""
    if not _is_int(limit) or limit < 1 or limit > MAX_LIMIT:
        raise InvalidParameter('limit', f'Invalid limit. Must be between 1 and {MAX_LIMIT}')
    if not _is_int(offset) or offset < 0:
        raise InvalidParameter('offset', 'Invalid offset. Must be a non-negative integer')
    if since_days is not None and (not _is_int(since_days) or since_days < 1):
        raise InvalidParameter('days', 'Invalid days. Must be a positive integer')


def _since_cutoff(since_days):
    """Earliest recorded_at for a since_days filter, or None for no filter.

    A window reaching back before datetime.min covers every reading.
    """
    if since_days is None:
        return None
    now = utcnow()
    if since_days > (now - datetime.min).days:
        return None
    try:
        return now - timedelta(days=since_days)
    except OverflowError:
        return None


class ReadingStore:
    """Create, query, fetch and delete readings in the bp_records table.

    Usage::

        store = ReadingStore(db.session)
        reading = store.create(120, 80, 72, notes='morning')
        page = store.query(limit=10, since_days=7)
        store.delete(reading.id)
    """

    def __init__(self, session):
        self._session = session

    def create(self, systolic, diastolic, heart_rate, notes=None, recorded_at=None):
        """Persist a reading and return it as stored.

        Ranges are the caller's job (see utils.parser / utils.validators).
        heart_rate None is stored as 0, the "not recorded" marker.
        """
        reading = BloodPressureReading(
            systolic=systolic,
            diastolic=diastolic,
            heart_rate=0 if heart_rate is None else heart_rate,
            notes=notes,
        )
        if recorded_at is not None:
            if recorded_at.tzinfo is not None:
                recorded_at = recorded_at.astimezone(timezone.utc).replace(tzinfo=None)
            reading.recorded_at = recorded_at

        try:
            self._session.add(reading)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f'Failed to insert reading {systolic}/{diastolic}: {e}')
            raise PersistenceError('Failed to save reading') from e

        stored = self.get_by_id(reading.id)
        if stored is None:
            raise PersistenceError('Failed to retrieve created record')
        return stored

    def query(self, limit=DEFAULT_LIMIT, offset=0, since_days=None):
        """Newest-first page of readings plus the count matching the date filter."""
        validate_page_options(limit, offset, since_days)

        filters = []
        cutoff = _since_cutoff(since_days)
        if cutoff is not None:
            filters.append(BloodPressureReading.recorded_at >= cutoff)
        # Past the last row anyway; SQLite cannot bind larger offsets
        offset = min(offset, MAX_SQL_INT)

        try:
            total = self._session.scalar(
                select(func.count(BloodPressureReading.id)).where(*filters)
            )
            records = self._session.scalars(
                select(BloodPressureReading)
                .where(*filters)
                .order_by(BloodPressureReading.recorded_at.desc(), BloodPressureReading.id.desc())
                .limit(limit)
                .offset(offset)
            ).all()
        except SQLAlchemyError as e:
            logger.error(f'Failed to query readings: {e}')
            raise PersistenceError('Failed to load readings') from e

        return ReadingPage(records=list(records), total=total or 0)

    def between(self, start=None, end=None):
        """All readings recorded on or after start and on or before end (dates, inclusive)."""
        stmt = select(BloodPressureReading)
        if start is not None:
            stmt = stmt.where(BloodPressureReading.recorded_at >= datetime.combine(start, time.min))
        if end is not None and end < date.max:
            stmt = stmt.where(
                BloodPressureReading.recorded_at < datetime.combine(end + timedelta(days=1), time.min)
            )
        stmt = stmt.order_by(BloodPressureReading.recorded_at.desc(), BloodPressureReading.id.desc())

        try:
            return list(self._session.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f'Failed to load readings for export: {e}')
            raise PersistenceError('Failed to load readings') from e

    def get_by_id(self, record_id) -> Optional[BloodPressureReading]:
        if record_id > MAX_SQL_INT:
            return None
        try:
            return self._session.get(BloodPressureReading, record_id)
        except SQLAlchemyError as e:
            logger.error(f'Failed to load reading {record_id}: {e}')
            raise PersistenceError('Failed to load reading') from e

    def delete(self, record_id):
        """Delete by id. Returns False when no such reading exists."""
        if record_id > MAX_SQL_INT:
            return False
        try:
            result = self._session.execute(
                delete(BloodPressureReading).where(BloodPressureReading.id == record_id)
            )
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f'Failed to delete reading {record_id}: {e}')
            raise PersistenceError('Failed to delete reading') from e

        return result.rowcount > 0

    def count(self):
        return self._session.scalar(select(func.count(BloodPressureReading.id))) or 0

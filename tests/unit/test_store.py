"""Tests for ReadingStore against a temporary SQLite database."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from bp_tracker import create_app, db
from bp_tracker.errors import InvalidParameter, PersistenceError
from bp_tracker.models.reading import utcnow
from bp_tracker.store import ReadingStore


class TestCreate:
    def test_returns_stored_record(self, store):
        reading = store.create(120, 80, 72, notes="Morning")
        assert reading.id is not None
        assert (reading.systolic, reading.diastolic, reading.heart_rate) == (120, 80, 72)
        assert reading.notes == "Morning"

    def test_assigns_default_timestamp(self, store):
        before = utcnow() - timedelta(seconds=1)
        reading = store.create(120, 80, 72)
        assert before <= reading.recorded_at <= utcnow() + timedelta(seconds=1)

    def test_notes_optional(self, store):
        assert store.create(120, 80, 72).notes is None

    def test_missing_heart_rate_stored_as_zero(self, store):
        reading = store.create(120, 80, None)
        raw = db.session.execute(
            text("SELECT heart_rate FROM bp_records WHERE id = :id"), {"id": reading.id}
        ).scalar()
        assert raw == 0
        assert reading.to_dict()["heart_rate"] is None

    def test_explicit_aware_timestamp_is_stored_as_utc(self, store):
        recorded_at = datetime(2024, 1, 15, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        reading = store.create(120, 80, 72, recorded_at=recorded_at)
        assert reading.recorded_at == datetime(2024, 1, 15, 8, 0)
        assert reading.to_dict()["recorded_at"] == "2024-01-15T08:00:00.000Z"

    def test_ids_increase(self, store):
        first = store.create(120, 80, 72)
        second = store.create(121, 81, 73)
        assert second.id > first.id

    def test_ids_not_reused_after_delete(self, store):
        first = store.create(120, 80, 72)
        store.delete(first.id)
        assert store.create(120, 80, 72).id > first.id

    def test_missing_systolic_is_persistence_error(self, store):
        with pytest.raises(PersistenceError):
            store.create(None, 80, 72)
        # Session still usable after the rollback
        assert store.create(120, 80, 72).id is not None

    def test_no_range_validation_at_store_level(self, store):
        assert store.create(300, 10, 500).systolic == 300


class TestQuery:
    def test_empty(self, store):
        page = store.query()
        assert page.records == []
        assert page.total == 0

    def test_newest_first(self, seeded_store):
        page = seeded_store.query()
        assert [r.systolic for r in page.records] == [125, 124, 123, 122, 121]
        assert page.total == 5

    def test_pagination(self, seeded_store):
        page = seeded_store.query(limit=2, offset=1)
        assert [r.systolic for r in page.records] == [124, 123]
        assert page.total == 5

    def test_offset_past_end(self, seeded_store):
        page = seeded_store.query(limit=10, offset=10)
        assert page.records == []
        assert page.total == 5

    def test_default_limit_is_50(self, store):
        for i in range(55):
            store.create(100 + i % 50, 80, 70)
        page = store.query()
        assert len(page.records) == 50
        assert page.total == 55

    def test_ties_broken_by_id(self, store):
        same_time = datetime(2024, 5, 1, 9, 0)
        first = store.create(120, 80, 72, recorded_at=same_time)
        second = store.create(130, 85, 72, recorded_at=same_time)
        assert [r.id for r in store.query().records] == [second.id, first.id]

    def test_since_days_filters_and_total_counts_filtered(self, store):
        now = utcnow()
        for days_ago in (0, 2, 5, 10):
            store.create(120, 80, 72, recorded_at=now - timedelta(days=days_ago, minutes=1))

        page = store.query(since_days=7)
        assert len(page.records) == 3
        assert page.total == 3

        page = store.query(since_days=3, limit=1)
        assert len(page.records) == 1
        assert page.total == 2

    @pytest.mark.parametrize("kwargs, parameter", [
        ({"limit": 0}, "limit"),
        ({"limit": -1}, "limit"),
        ({"limit": 1001}, "limit"),
        ({"limit": "10"}, "limit"),
        ({"offset": -1}, "offset"),
        ({"since_days": 0}, "days"),
        ({"since_days": -5}, "days"),
        ({"limit": 0, "offset": -1}, "limit"),
    ])
    def test_invalid_parameters(self, store, kwargs, parameter):
        with pytest.raises(InvalidParameter) as excinfo:
            store.query(**kwargs)
        assert excinfo.value.parameter == parameter

    def test_limit_bounds_accepted(self, seeded_store):
        assert len(seeded_store.query(limit=1).records) == 1
        assert len(seeded_store.query(limit=1000).records) == 5


class TestBetween:
    def test_inclusive_dates(self, store):
        store.create(110, 70, 60, notes="January", recorded_at=datetime(2024, 1, 15, 8, 0))
        store.create(120, 80, 72, notes="March", recorded_at=datetime(2024, 3, 31, 23, 59))
        store.create(130, 90, 80, notes="June", recorded_at=datetime(2024, 6, 20, 14, 0))

        assert [r.notes for r in store.between()] == ["June", "March", "January"]
        assert [r.notes for r in store.between(start=datetime(2024, 3, 1).date())] == ["June", "March"]
        assert [r.notes for r in store.between(end=datetime(2024, 3, 31).date())] == ["March", "January"]
        assert [r.notes for r in store.between(datetime(2024, 12, 1).date(), datetime(2024, 12, 31).date())] == []


class TestGetAndDelete:
    def test_get_by_id(self, store):
        created = store.create(120, 80, 72, notes="x")
        fetched = store.get_by_id(created.id)
        assert fetched.id == created.id
        assert fetched.notes == "x"

    def test_get_missing(self, store):
        assert store.get_by_id(999) is None

    def test_delete_is_idempotent(self, store):
        reading = store.create(120, 80, 72)
        reading_id = reading.id
        assert store.delete(reading_id) is True
        assert store.get_by_id(reading_id) is None
        assert store.delete(reading_id) is False
        assert store.get_by_id(reading_id) is None

    def test_delete_only_target(self, seeded_store):
        target = seeded_store.query(limit=1).records[0]
        seeded_store.delete(target.id)
        assert seeded_store.count() == 4


def test_independent_stores_do_not_share_data(tmp_path):
    apps = []
    for name in ("a", "b"):
        app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / name}.db"})
        with app.app_context():
            db.create_all()
        apps.append(app)

    with apps[0].app_context():
        ReadingStore(db.session).create(120, 80, 72)
    with apps[1].app_context():
        assert ReadingStore(db.session).count() == 0
    with apps[0].app_context():
        assert ReadingStore(db.session).count() == 1


def test_sqlite_uses_wal(store):
    mode = db.session.execute(text("PRAGMA journal_mode")).scalar()
    assert mode.lower() == "wal"


class TestValuesBeyondStorageRange:
    @pytest.mark.parametrize("since_days", [10**6, 10**10])
    def test_huge_since_days_returns_everything(self, seeded_store, since_days):
        page = seeded_store.query(since_days=since_days)
        assert page.total == 5
        assert len(page.records) == 5

    def test_huge_offset_is_empty_page(self, seeded_store):
        page = seeded_store.query(offset=10**20)
        assert page.records == []
        assert page.total == 5

    def test_huge_id_is_not_found(self, seeded_store):
        assert seeded_store.get_by_id(10**20) is None
        assert seeded_store.delete(10**20) is False
        assert seeded_store.count() == 5

    def test_end_at_last_representable_date(self, seeded_store):
        assert len(seeded_store.between(end=date.max)) == 5
        assert len(seeded_store.between(start=date.max)) == 0

"""Shared test fixtures for BP Tracker tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bp_tracker import create_app, db
from bp_tracker.models.reading import utcnow

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'bp.db'}")
    monkeypatch.setenv("AUDIT_LOG_FILE", str(tmp_path / "logs" / "audit.log"))
    monkeypatch.delenv("FLASK_ENV", raising=False)
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)


# ---------------------------------------------------------------------------
# App / storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app(tmp_path):
    """A fresh app backed by its own SQLite file under tmp_path."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'bp.db'}",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def store(app):
    """The ReadingStore owned by the test app."""
    return app.extensions["reading_store"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded_store(store):
    """Five readings, one per day, newest created last."""
    for days_ago, systolic in [(4, 121), (3, 122), (2, 123), (1, 124), (0, 125)]:
        store.create(
            systolic, 80, 70, notes=f"day -{days_ago}",
            recorded_at=utcnow() - timedelta(days=days_ago, minutes=1),
        )
    return store

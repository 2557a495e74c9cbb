"""Tests for the flask CLI commands."""

from __future__ import annotations

import os


def test_log_reading(app, store):
    result = app.test_cli_runner().invoke(args=["log-reading", "120/80/72", "after run"])
    assert result.exit_code == 0, result.output
    assert "BP Recorded: 120/80/72 High Stage 1" in result.output
    assert "ID: " in result.output

    reading = store.query().records[0]
    assert (reading.systolic, reading.diastolic, reading.heart_rate) == (120, 80, 72)
    assert reading.notes == "after run"


def test_log_reading_without_heart_rate(app, store):
    result = app.test_cli_runner().invoke(args=["log-reading", "115/75"])
    assert result.exit_code == 0, result.output
    assert "BP Recorded: 115/75/N/A Normal" in result.output
    assert store.count() == 1


def test_log_reading_rejects_bad_input(app, store):
    result = app.test_cli_runner().invoke(args=["log-reading", "10/20"])
    assert result.exit_code != 0
    assert "Systolic must be between 60 and 250" in result.output
    assert store.count() == 0


def test_log_reading_is_audited(app):
    app.test_cli_runner().invoke(args=["log-reading", "120/80"])
    with open(app.config["AUDIT_LOG_FILE"]) as f:
        entries = f.read()
    assert '"action": "CREATE"' in entries
    assert '"source": "cli"' in entries
    assert os.path.isabs(app.config["AUDIT_LOG_FILE"])

"""Tests for run_best_effort and safe_rollback."""

import logging

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.best_effort import run_best_effort, safe_rollback


def test_returns_result(db):
    assert run_best_effort(db, "add", lambda a, b: a + b, 1, b=2) == 3


def test_swallows_datastore_errors(db, caplog):
    def fail():
        raise IntegrityError("INSERT", {}, Exception("duplicate"))

    with caplog.at_level(logging.WARNING):
        assert run_best_effort(db, "record_thing", fail) is None

    assert "record_thing" in caplog.text


def test_propagates_other_errors(db):
    def fail():
        raise ValueError("bug")

    with pytest.raises(ValueError):
        run_best_effort(db, "buggy", fail)


def test_failed_rollback_is_logged_not_raised(db, monkeypatch, caplog):
    def lost_connection():
        raise OperationalError("ROLLBACK", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "rollback", lost_connection)

    with caplog.at_level(logging.WARNING):
        safe_rollback(db, "record_thing")

    assert "Rollback after 'record_thing' failed" in caplog.text


def test_datastore_error_with_failed_rollback(db, monkeypatch):
    def lost_connection():
        raise OperationalError("ROLLBACK", {}, Exception("connection lost"))

    def fail():
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "rollback", lost_connection)

    assert run_best_effort(db, "record_thing", fail) is None

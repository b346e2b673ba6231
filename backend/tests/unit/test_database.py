"""Tests for database session management."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine, text

from database import _enable_sqlite_foreign_keys, get_db


class TestSqliteForeignKeys:
    def test_pragma_enabled_on_connect(self):
        """The connect listener turns on SQLite foreign key enforcement."""
        engine = create_engine("sqlite:///:memory:")
        _enable_sqlite_foreign_keys(engine)
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


class TestGetDb:
    def test_rolls_back_and_closes_on_error(self):
        session = MagicMock()
        with patch("database.get_session_local", return_value=lambda: session):
            gen = get_db()
            assert next(gen) is session
            with pytest.raises(RuntimeError):
                gen.throw(RuntimeError("boom"))
        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_closes_without_rollback_on_success(self):
        session = MagicMock()
        with patch("database.get_session_local", return_value=lambda: session):
            gen = get_db()
            next(gen)
            with pytest.raises(StopIteration):
                next(gen)
        session.rollback.assert_not_called()
        session.close.assert_called_once()

from datetime import datetime, timedelta, timezone

import mysql.connector
import pytest

from src.timetracker.timetracker.core.exceptions import StorageError
from src.timetracker.timetracker.database.mysql_base import db_cursor, from_db_datetime, to_db_datetime


class FakeCursor:
    def __init__(self, error=None):
        self._error = error
        self.closed = False

    def execute(self, *args):
        if self._error:
            raise self._error

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = self.rolled_back = self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn


def test_datetime_round_trip_through_naive_utc():
    local = datetime(2026, 2, 2, 10, 0, tzinfo=timezone(timedelta(hours=5)))
    stored = to_db_datetime(local)
    assert stored == datetime(2026, 2, 2, 5, 0)
    assert from_db_datetime(stored) == local
    assert from_db_datetime("2026-02-02 05:00:00") == local
    assert from_db_datetime(None) is None


def test_db_cursor_commits_on_success():
    conn = FakeConn(FakeCursor())
    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")
    assert conn.committed and conn.closed and not conn.rolled_back


def test_db_cursor_wraps_driver_errors():
    conn = FakeConn(FakeCursor(error=mysql.connector.Error("boom")))
    with pytest.raises(StorageError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELECT 1")
    assert conn.rolled_back and conn.closed

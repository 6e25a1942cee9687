# =============================================================================
# tests/test_record_store.py - Record Store Gateway Tests
# =============================================================================
# Tests for:
# - Statement builders: table/column names only ever appear as Identifiers
# - RecordStore against a fake pool: results, not-found, error mapping
# - Connections are returned to the pool on every exit path
# =============================================================================

import asyncio
from contextlib import asynccontextmanager

import psycopg
import pytest
from psycopg import sql

from app.exceptions import DatabaseError, MissingTableError, RecordNotFoundError
from core.services import RecordStore
from core.services.record_store import (
    delete_query,
    insert_query,
    select_all_query,
    select_by_query,
    update_query,
)


def leaves(composable):
    """Flatten a Composed into its leaf Composables."""
    if isinstance(composable, sql.Composed):
        for part in composable:
            yield from leaves(part)
    else:
        yield composable


def identifiers(composable) -> list[sql.Identifier]:
    return [leaf for leaf in leaves(composable) if isinstance(leaf, sql.Identifier)]


def literal_text(composable) -> str:
    return "".join(leaf.as_string(None) for leaf in leaves(composable) if isinstance(leaf, sql.SQL))


# =============================================================================
# Fake Pool
# =============================================================================

class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = conn.rowcount

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, query, params=()):
        self.conn.executed.append((query, params))
        if self.conn.error is not None:
            raise self.conn.error

    async def fetchall(self):
        return list(self.conn.rows)

    async def fetchone(self):
        return self.conn.rows[0] if self.conn.rows else None


class FakeConnection:
    def __init__(self, rows=None, rowcount=1, error=None):
        self.rows = rows or []
        self.rowcount = rowcount
        self.error = error
        self.executed = []

    def cursor(self, row_factory=None):
        return FakeCursor(self)


class FakePool:
    """Counts leases and returns so tests can assert nothing leaks."""

    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.leased = 0
        self.returned = 0

    @asynccontextmanager
    async def connection(self):
        self.leased += 1
        try:
            yield self.conn
        finally:
            self.returned += 1


def make_store(**conn_kwargs):
    pool = FakePool(FakeConnection(**conn_kwargs))
    return RecordStore(pool), pool


# =============================================================================
# Statement Builders
# =============================================================================

class TestStatementBuilders:

    def test_insert_quotes_table_and_columns(self):
        query = insert_query("apps_demo", ["title", "image"])

        assert identifiers(query) == [
            sql.Identifier("apps_demo"),
            sql.Identifier("title"),
            sql.Identifier("image"),
        ]
        assert sum(isinstance(leaf, sql.Placeholder) for leaf in leaves(query)) == 2

    def test_hostile_table_name_never_becomes_sql_text(self):
        table = 'apps"; DROP TABLE users; --'

        for query in (
            insert_query(table, ["title"]),
            select_all_query(table),
            select_by_query(table, "id"),
            update_query(table, ["title"]),
            delete_query(table),
        ):
            assert sql.Identifier(table) in identifiers(query)
            assert "DROP TABLE" not in literal_text(query)

    def test_update_matches_on_id(self):
        query = update_query("projects_demo", ["image", "pdf"])

        assert identifiers(query)[-1] == sql.Identifier("id")
        assert literal_text(query).startswith("UPDATE ")


# =============================================================================
# RecordStore
# =============================================================================

class TestRecordStore:

    def test_create_binds_values_in_column_order(self):
        store, pool = make_store()

        asyncio.run(store.create("apps_demo", {"title": "Tidy", "image": "1_tidy.png"}))

        _, params = pool.conn.executed[0]
        assert params == ("Tidy", "1_tidy.png")
        assert pool.leased == pool.returned == 1

    def test_read_returns_rows(self):
        rows = [{"id": 1, "title": "Tidy"}]
        store, _ = make_store(rows=rows)

        assert asyncio.run(store.read("apps_demo")) == rows

    def test_read_empty_table(self):
        store, _ = make_store(rows=[])

        assert asyncio.run(store.read("apps_demo")) == []

    @pytest.mark.parametrize("table", [None, ""])
    def test_missing_table_rejected_before_leasing(self, table):
        store, pool = make_store()

        with pytest.raises(MissingTableError):
            asyncio.run(store.read(table))

        assert pool.leased == 0

    def test_read_one_not_found(self):
        store, _ = make_store(rows=[])

        with pytest.raises(RecordNotFoundError):
            asyncio.run(store.read_one("apps_demo", 99))

    def test_update_zero_rows_is_not_found(self):
        store, pool = make_store(rowcount=0)

        with pytest.raises(RecordNotFoundError):
            asyncio.run(store.update("apps_demo", {"title": "x"}, 99))

        _, params = pool.conn.executed[0]
        assert params == ("x", 99)
        assert pool.leased == pool.returned == 1

    def test_delete_returns_affected(self):
        store, _ = make_store(rowcount=1)

        assert asyncio.run(store.delete("projects_demo", 3)) == 1

    def test_driver_error_becomes_database_error(self):
        store, pool = make_store(error=psycopg.errors.UndefinedTable("relation does not exist"))

        with pytest.raises(DatabaseError) as exc_info:
            asyncio.run(store.create("nope", {"title": "x"}))

        # Driver text stays out of the client-facing message
        assert exc_info.value.message == "Database query failed"
        assert pool.leased == pool.returned == 1

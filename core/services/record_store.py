# =============================================================================
# core/services/record_store.py - Dynamic-Table CRUD Gateway
# =============================================================================
# Runs create/read/update/delete statements against a table whose name is
# chosen by the caller at request time.
#
# Table and column names are untrusted input. They are only ever placed in
# a statement as psycopg `sql.Identifier`s (quoted and escaped by the
# driver); values always travel as bound parameters.
#
# Each call leases one pooled connection for the duration of a single
# statement; the pool's context manager commits on success, rolls back on
# error and returns the connection on every exit path.
# =============================================================================

import logging
from typing import Any, Iterable

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from app.exceptions import DatabaseError, MissingTableError, RecordNotFoundError

logger = logging.getLogger(__name__)

ID_COLUMN = "id"


# =============================================================================
# Statement Builders
# =============================================================================

def insert_query(table: str, columns: Iterable[str]) -> sql.Composed:
    columns = list(columns)
    return sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
        sql.Identifier(table),
        sql.SQL(", ").join(map(sql.Identifier, columns)),
        sql.SQL(", ").join(sql.Placeholder() * len(columns)),
    )


def select_all_query(table: str) -> sql.Composed:
    return sql.SQL("SELECT * FROM {}").format(sql.Identifier(table))


def select_by_query(table: str, column: str) -> sql.Composed:
    return sql.SQL("SELECT * FROM {} WHERE {} = %s").format(
        sql.Identifier(table),
        sql.Identifier(column),
    )


def update_query(table: str, columns: Iterable[str], key: str = ID_COLUMN) -> sql.Composed:
    assignments = sql.SQL(", ").join(
        sql.SQL("{} = %s").format(sql.Identifier(column)) for column in columns
    )
    return sql.SQL("UPDATE {} SET {} WHERE {} = %s").format(
        sql.Identifier(table),
        assignments,
        sql.Identifier(key),
    )


def delete_query(table: str, key: str = ID_COLUMN) -> sql.Composed:
    return sql.SQL("DELETE FROM {} WHERE {} = %s").format(
        sql.Identifier(table),
        sql.Identifier(key),
    )


# =============================================================================
# Gateway
# =============================================================================

class RecordStore:
    """
    CRUD executor over runtime-named tables.

    Example:
        store = RecordStore(pool)
        await store.create("apps_demo", {"title": "Tidy", "image": "1718_tidy.png"})
        rows = await store.read("apps_demo")
        await store.update("apps_demo", {"title": "Tidier"}, record_id=3)
    """

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    @staticmethod
    def _require_table(table: str | None) -> str:
        if not table:
            raise MissingTableError()
        return table

    async def _run(
        self,
        operation: str,
        query: sql.Composable,
        params: tuple[Any, ...] = (),
        fetch: str | None = None,
    ) -> Any:
        """
        Execute one statement on a leased connection.

        Args:
            operation: Short label used in logs and error details
            query: Composed statement
            params: Bound values
            fetch: "all", "one" or None (return affected row count)

        Raises:
            DatabaseError: On any driver or pool failure (logged, not echoed)
        """
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    if fetch == "all":
                        return await cur.fetchall()
                    if fetch == "one":
                        return await cur.fetchone()
                    return cur.rowcount
        except psycopg.Error as e:
            logger.error(f"Database {operation} failed: {e}", exc_info=True)
            raise DatabaseError(operation) from e

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def create(self, table: str | None, fields: dict[str, Any]) -> None:
        """Insert one row built from `fields`."""
        table = self._require_table(table)
        columns = list(fields)
        await self._run(
            "insert",
            insert_query(table, columns),
            tuple(fields[c] for c in columns),
        )
        logger.info(f"Inserted row into {table}")

    async def read(self, table: str | None) -> list[dict[str, Any]]:
        """Return every row of `table` (possibly an empty list)."""
        table = self._require_table(table)
        return await self._run("select", select_all_query(table), fetch="all")

    async def read_one(self, table: str | None, record_id: Any) -> dict[str, Any]:
        """
        Return the row whose id is `record_id`.

        Raises:
            RecordNotFoundError: If no row matches
        """
        table = self._require_table(table)
        row = await self.find_one_by(table, ID_COLUMN, record_id)
        if row is None:
            raise RecordNotFoundError(table, record_id)
        return row

    async def find_one_by(self, table: str | None, column: str, value: Any) -> dict[str, Any] | None:
        """First row where `column` equals `value`, or None."""
        table = self._require_table(table)
        return await self._run("select", select_by_query(table, column), (value,), fetch="one")

    async def update(self, table: str | None, fields: dict[str, Any], record_id: Any) -> None:
        """
        Overwrite `fields` on the row whose id is `record_id`.

        Raises:
            RecordNotFoundError: If zero rows were affected
        """
        table = self._require_table(table)
        columns = list(fields)
        affected = await self._run(
            "update",
            update_query(table, columns),
            tuple(fields[c] for c in columns) + (record_id,),
        )
        if not affected:
            raise RecordNotFoundError(table, record_id)
        logger.info(f"Updated row {record_id} in {table}")

    async def delete(self, table: str | None, record_id: Any) -> int:
        """Delete the row whose id is `record_id`; returns rows affected."""
        table = self._require_table(table)
        affected = await self._run("delete", delete_query(table), (record_id,))
        logger.info(f"Deleted {affected} row(s) with id {record_id} from {table}")
        return affected

    async def ping(self) -> None:
        """Round-trip a trivial statement (readiness probe)."""
        await self._run("ping", sql.SQL("SELECT 1"), fetch="one")

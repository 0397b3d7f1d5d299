"""Catalog query execution and row decoding."""

import logging
from typing import Any, Callable, Sequence, TypeVar

from sqlalchemy import Connection, text
from sqlalchemy.exc import SQLAlchemyError

from db_doc.errors import CatalogQueryError
from db_doc.utils.rows import row_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

RowDecoder = Callable[[Sequence[Any]], T]


class CatalogReader:
    """Runs catalog queries over an open connection, one at a time."""

    def run_scalar_probe(
        self, connection: Connection, query: str, purpose: str
    ) -> tuple[str, bool]:
        """
        Run a single-value probe query.

        The value is read from the last column of the first row, so probes
        shaped like SHOW VARIABLES (name, value) work as well.

        Args:
            connection: Open database connection
            query: Probe SQL
            purpose: Which probe this is, for diagnostics

        Returns:
            Tuple of (value, found); ("", False) when no row came back

        Raises:
            CatalogQueryError: If the query fails to execute
        """
        rows = self._fetch(connection, query, purpose, first_only=True)
        if not rows:
            logger.debug(f"Probe {purpose} returned no rows")
            return ("", False)

        row = rows[0]
        return (row_text(row, len(row) - 1), True)

    def run_row_query(
        self,
        connection: Connection,
        query: str,
        decoder: RowDecoder[T],
        purpose: str,
    ) -> list[T]:
        """
        Run a multi-row query and decode each row.

        Args:
            connection: Open database connection
            query: Catalog SQL
            decoder: Converts one result row into a typed record
            purpose: What the query reads, for diagnostics

        Returns:
            Decoded records in result order (empty when no rows)

        Raises:
            CatalogQueryError: If the query fails to execute
        """
        rows = self._fetch(connection, query, purpose)
        return [decoder(row) for row in rows]

    def _fetch(
        self,
        connection: Connection,
        query: str,
        purpose: str,
        first_only: bool = False,
    ) -> list[Sequence[Any]]:
        """Execute and materialize rows; the cursor is always closed."""
        logger.debug(f"Running catalog query for {purpose}")

        try:
            result = connection.execute(text(query))
        except SQLAlchemyError as e:
            self._reset(connection)
            raise CatalogQueryError(purpose, query, str(e)) from e

        try:
            if not result.returns_rows:
                return []
            if first_only:
                row = result.fetchone()
                return [tuple(row)] if row is not None else []
            return [tuple(row) for row in result.fetchall()]
        except SQLAlchemyError as e:
            self._reset(connection)
            raise CatalogQueryError(purpose, query, str(e)) from e
        finally:
            result.close()

    def _reset(self, connection: Connection) -> None:
        """Roll back after a failed query so later queries can still run.

        PostgreSQL rejects every statement in an aborted transaction.
        """
        if not connection.in_transaction():
            return
        try:
            connection.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after failed catalog query failed: {e}")

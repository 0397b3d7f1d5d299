"""Schema assembly: runs the catalog queries and builds a SchemaSnapshot."""

import logging
from typing import Optional, Union

from sqlalchemy import Connection

from db_doc.core.reader import CatalogReader
from db_doc.dialects import BaseDialect, ProbeKind, TableRow, create_dialect
from db_doc.errors import CatalogQueryError, ConfigurationError, IntrospectionError
from db_doc.models.schema import (
    ColumnInfo,
    DatabaseInfo,
    EngineVariant,
    SchemaSnapshot,
    TableInfo,
)

logger = logging.getLogger(__name__)

# Metadata probes; failures here degrade a field instead of aborting
METADATA_PROBES = (ProbeKind.VERSION, ProbeKind.CHARSET, ProbeKind.COLLATION)


class SchemaAssembler:
    """Builds a normalized schema snapshot for one dialect."""

    def __init__(self, dialect: BaseDialect, reader: Optional[CatalogReader] = None):
        """
        Initialize schema assembler.

        Args:
            dialect: Catalog dialect selected for the run
            reader: Catalog reader (a default one is created when omitted)
        """
        self.dialect = dialect
        self.reader = reader or CatalogReader()

    def introspect(self, connection: Connection, database_name: str) -> SchemaSnapshot:
        """
        Read database metadata, tables and columns into a snapshot.

        Queries run strictly in order: metadata probes, table list, then
        one column query per table in list order.

        Args:
            connection: Open, validated connection owned by the caller
            database_name: Configured database name (not re-queried)

        Returns:
            Immutable schema snapshot

        Raises:
            ConfigurationError: If no database name is given
            IntrospectionError: If tables or columns cannot be read
        """
        if not database_name:
            raise ConfigurationError("Database name is required for introspection")

        logger.info(
            f"Introspecting {self.dialect.name} database '{database_name}'"
        )

        probed = {
            kind: self._probe(connection, kind, database_name)
            for kind in METADATA_PROBES
        }
        database = DatabaseInfo(
            name=database_name,
            version=probed[ProbeKind.VERSION],
            charset=probed[ProbeKind.CHARSET],
            collation=probed[ProbeKind.COLLATION],
        )

        tables = [
            TableInfo(
                name=row.name,
                comment=row.comment or row.name,
                columns=tuple(self._read_columns(connection, row.name, database_name)),
            )
            for row in self._read_tables(connection, database_name)
        ]

        logger.info(
            f"Introspected {len(tables)} tables, "
            f"{sum(len(t.columns) for t in tables)} columns from '{database_name}'"
        )
        return SchemaSnapshot(
            engine=self.dialect.engine, database=database, tables=tuple(tables)
        )

    def _probe(
        self, connection: Connection, kind: ProbeKind, database_name: str
    ) -> str:
        """Run one metadata probe; failure or no row yields ''."""
        query = self.dialect.build_probe_query(kind, database_name)
        try:
            value, found = self.reader.run_scalar_probe(connection, query, kind.value)
        except CatalogQueryError as e:
            logger.warning(f"{kind.value} probe failed, leaving it empty: {e}")
            return ""

        if not found:
            logger.warning(f"{kind.value} probe returned no rows, leaving it empty")
        return value

    def _read_tables(
        self, connection: Connection, database_name: str
    ) -> list[TableRow]:
        """List tables; duplicate names from the catalog are dropped."""
        query = self.dialect.build_probe_query(ProbeKind.TABLE_LIST, database_name)
        try:
            rows = self.reader.run_row_query(
                connection, query, self.dialect.decode_table_row, "table list"
            )
        except CatalogQueryError as e:
            logger.error(f"Cannot enumerate tables of '{database_name}': {e}")
            raise IntrospectionError("table list", message=str(e)) from e

        seen: set[str] = set()
        tables = []
        for row in rows:
            if row.name in seen:
                logger.warning(f"Duplicate catalog row for table '{row.name}' dropped")
                continue
            seen.add(row.name)
            tables.append(row)
        return tables

    def _read_columns(
        self, connection: Connection, table_name: str, database_name: str
    ) -> list[ColumnInfo]:
        query = self.dialect.build_column_query(table_name, database_name)
        try:
            return self.reader.run_row_query(
                connection,
                query,
                self.dialect.decode_column_row,
                f"columns of table '{table_name}'",
            )
        except CatalogQueryError as e:
            logger.error(f"Cannot enumerate columns of table '{table_name}': {e}")
            raise IntrospectionError(
                "column list", table=table_name, message=str(e)
            ) from e


def introspect(
    connection: Connection,
    engine: Union[EngineVariant, int, str],
    database_name: str,
    schema: Optional[str] = None,
) -> SchemaSnapshot:
    """
    Introspect a database over an open connection.

    Args:
        connection: Open, validated connection
        engine: Engine variant of the connected database
        database_name: Configured database name
        schema: Namespace to document (PostgreSQL and SQL Server)

    Returns:
        Immutable schema snapshot

    Raises:
        ConfigurationError: If the engine variant is not recognized
            or the database name is empty
        IntrospectionError: If tables or columns cannot be read
    """
    return SchemaAssembler(create_dialect(engine, schema)).introspect(
        connection, database_name
    )

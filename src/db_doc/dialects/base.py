"""Base dialect defining the catalog queries each engine must provide."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, NamedTuple, Optional, Sequence

from db_doc.errors import ConfigurationError
from db_doc.models.schema import ColumnInfo, EngineVariant
from db_doc.utils.rows import parse_key, parse_nullable, row_text


class ProbeKind(str, Enum):
    """Catalog probes run once per introspection."""

    VERSION = "version"
    CHARSET = "charset"
    COLLATION = "collation"
    TABLE_LIST = "table_list"


class TableRow(NamedTuple):
    """Decoded table-list row; comment may still be empty."""

    name: str
    comment: str


class BaseDialect(ABC):
    """
    Catalog dialect for one engine variant.

    The dialect is the only place engine-specific SQL lives. Every query
    honours a fixed output-column contract:

    - probes return one row, the value in the last column
    - the table list returns (TableName, TableComment)
    - the column query returns (ColName, ColType, ColKey, IsNullable,
      ColComment, ColDefault) ordered by ordinal position
    """

    engine: EngineVariant

    def __init__(self, schema: Optional[str] = None):
        """
        Initialize dialect.

        Args:
            schema: Namespace to document, for engines that have one
        """
        self.schema = schema

    @abstractmethod
    def version_query(self) -> str:
        """Query returning the engine version string."""
        ...

    @abstractmethod
    def charset_query(self) -> str:
        """Query returning the server character set."""
        ...

    @abstractmethod
    def collation_query(self) -> str:
        """Query returning the server default collation."""
        ...

    @abstractmethod
    def table_list_query(self, database_name: str) -> str:
        """
        Query listing tables with their comments.

        Args:
            database_name: Database being documented

        Returns:
            SQL returning (TableName, TableComment) rows
        """
        ...

    @abstractmethod
    def column_query(self, table_name: str, database_name: str) -> str:
        """
        Query listing one table's columns in ordinal order.

        Args:
            table_name: Table to describe
            database_name: Database being documented

        Returns:
            SQL returning (ColName, ColType, ColKey, IsNullable, ColComment,
            ColDefault) rows
        """
        ...

    def build_probe_query(self, kind: ProbeKind, database_name: str = "") -> str:
        """
        Build the query text for a probe.

        Raises:
            ConfigurationError: If the probe kind is unknown
        """
        try:
            kind = ProbeKind(kind)
        except ValueError:
            raise ConfigurationError(f"Unknown probe kind: {kind!r}") from None

        if kind is ProbeKind.TABLE_LIST:
            return self.table_list_query(database_name)

        builders = {
            ProbeKind.VERSION: self.version_query,
            ProbeKind.CHARSET: self.charset_query,
            ProbeKind.COLLATION: self.collation_query,
        }
        return builders[kind]()

    def build_column_query(self, table_name: str, database_name: str = "") -> str:
        """Build the column query for one table."""
        if not table_name:
            raise ConfigurationError("Table name is required for a column query")
        return self.column_query(table_name, database_name)

    def decode_table_row(self, row: Sequence[Any]) -> TableRow:
        """Convert a table-list row to a TableRow."""
        return TableRow(name=row_text(row, 0), comment=row_text(row, 1))

    def decode_column_row(self, row: Sequence[Any]) -> ColumnInfo:
        """Convert a column-query row to ColumnInfo."""
        return ColumnInfo(
            name=row_text(row, 0),
            data_type=row_text(row, 1),
            key=parse_key(row_text(row, 2)),
            nullable=parse_nullable(row[3] if len(row) > 3 else None),
            comment=row_text(row, 4),
            default=row_text(row, 5),
        )

    @property
    def name(self) -> str:
        return self.engine.name.lower()

    def _literal(self, value: str) -> str:
        """Escape a value for embedding in a single-quoted SQL literal."""
        return value.replace("'", "''")

"""Catalog dialects: the single home of engine-specific SQL."""

from typing import Optional, Union

from db_doc.models.schema import EngineVariant

from .base import BaseDialect, ProbeKind, TableRow
from .mysql import MySQLDialect
from .postgresql import PostgresDialect
from .sqlserver import SQLServerDialect

__all__ = [
    "BaseDialect",
    "ProbeKind",
    "TableRow",
    "MySQLDialect",
    "SQLServerDialect",
    "PostgresDialect",
    "create_dialect",
    "build_probe_query",
    "build_column_query",
]

EngineSelector = Union[EngineVariant, int, str]

_DIALECTS: dict[EngineVariant, type[BaseDialect]] = {
    EngineVariant.MYSQL: MySQLDialect,
    EngineVariant.SQLSERVER: SQLServerDialect,
    EngineVariant.POSTGRESQL: PostgresDialect,
}


def create_dialect(engine: EngineSelector, schema: Optional[str] = None) -> BaseDialect:
    """
    Factory function to create the dialect for an engine variant.

    Args:
        engine: Engine variant, integer selector code, or name
        schema: Namespace to document (PostgreSQL and SQL Server)

    Returns:
        Dialect instance

    Raises:
        ConfigurationError: If the engine variant is not supported
    """
    variant = EngineVariant.parse(engine)
    dialect_class = _DIALECTS[variant]

    # MySQL scopes by database name; it has no separate schema level
    if variant is EngineVariant.MYSQL:
        return dialect_class()
    return dialect_class(schema)


def build_probe_query(
    kind: Union[ProbeKind, str], engine: EngineSelector, database_name: str = ""
) -> str:
    """
    Build probe query text for an engine.

    Args:
        kind: version, charset, collation or table_list
        engine: Engine variant
        database_name: Database being documented (needed by MySQL table list)

    Returns:
        SQL in the engine's dialect

    Raises:
        ConfigurationError: If the engine or probe kind is not recognized
    """
    return create_dialect(engine).build_probe_query(kind, database_name)


def build_column_query(
    table_name: str, engine: EngineSelector, database_name: str = ""
) -> str:
    """
    Build the column query for one table.

    Raises:
        ConfigurationError: If the engine is not recognized
    """
    return create_dialect(engine).build_column_query(table_name, database_name)

"""Schema introspection for database documentation.

Reads engine, character set, collation, tables and columns from MySQL,
SQL Server and PostgreSQL catalogs into one normalized snapshot.
"""

__version__ = "0.1.0"

from db_doc.core import CatalogReader, DatabaseConnection, SchemaAssembler, introspect
from db_doc.dialects import build_column_query, build_probe_query, create_dialect
from db_doc.errors import (
    CatalogQueryError,
    ConfigurationError,
    DatabaseConnectionError,
    DbDocError,
    IntrospectionError,
)
from db_doc.models import (
    ColumnInfo,
    DatabaseConfig,
    DatabaseInfo,
    EngineVariant,
    SchemaSnapshot,
    TableInfo,
)
from db_doc.service import generate

__all__ = [
    "__version__",
    "generate",
    "introspect",
    "build_probe_query",
    "build_column_query",
    "create_dialect",
    "CatalogReader",
    "DatabaseConnection",
    "SchemaAssembler",
    "DatabaseConfig",
    "EngineVariant",
    "DatabaseInfo",
    "TableInfo",
    "ColumnInfo",
    "SchemaSnapshot",
    "DbDocError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "CatalogQueryError",
    "IntrospectionError",
]

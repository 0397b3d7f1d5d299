"""Pydantic models for configuration and schema snapshots."""

from .config import DatabaseConfig
from .schema import ColumnInfo, DatabaseInfo, EngineVariant, SchemaSnapshot, TableInfo

__all__ = [
    "DatabaseConfig",
    "EngineVariant",
    "DatabaseInfo",
    "TableInfo",
    "ColumnInfo",
    "SchemaSnapshot",
]

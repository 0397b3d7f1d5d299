"""Normalized, engine-independent schema models."""

from enum import IntEnum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from db_doc.errors import ConfigurationError


class EngineVariant(IntEnum):
    """Relational database product whose catalog layout applies."""

    MYSQL = 1
    SQLSERVER = 2
    POSTGRESQL = 3

    @classmethod
    def parse(cls, value: Union["EngineVariant", int, str]) -> "EngineVariant":
        """
        Resolve an engine selector to an EngineVariant.

        Args:
            value: Enum member, integer selector code, or name/alias

        Returns:
            Matching engine variant

        Raises:
            ConfigurationError: If the selector is not recognized
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized.isdigit():
                value = int(normalized)
            else:
                variant = _ENGINE_ALIASES.get(normalized)
                if variant is None:
                    raise ConfigurationError(
                        f"Unsupported engine variant: '{value}'. "
                        f"Supported: {', '.join(sorted(_ENGINE_ALIASES))}"
                    )
                return variant

        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"Unsupported engine variant: {value!r}")

        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported engine variant: {value}. "
                f"Supported: {', '.join(f'{v.value} ({v.name})' for v in cls)}"
            ) from None


_ENGINE_ALIASES = {
    # MySQL variations
    "mysql": EngineVariant.MYSQL,
    "mariadb": EngineVariant.MYSQL,
    # SQL Server variations
    "mssql": EngineVariant.SQLSERVER,
    "sqlserver": EngineVariant.SQLSERVER,
    "sql_server": EngineVariant.SQLSERVER,
    # PostgreSQL variations
    "postgresql": EngineVariant.POSTGRESQL,
    "postgres": EngineVariant.POSTGRESQL,
    "pg": EngineVariant.POSTGRESQL,
}


class DatabaseInfo(BaseModel):
    """Information about the database instance."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ..., min_length=1, description="Database name (from configuration)"
    )
    version: str = Field(default="", description="Database version string")
    charset: str = Field(default="", description="Server character set")
    collation: str = Field(default="", description="Server default collation")


class ColumnInfo(BaseModel):
    """Column definition within a table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name")
    data_type: str = Field(..., description="Declared column type")
    key: str = Field(default="", description="'PRI' for primary key members")
    nullable: bool = Field(default=True, description="Whether NULL is allowed")
    comment: str = Field(default="", description="Column comment")
    default: str = Field(default="", description="Column default expression")

    @property
    def is_primary_key(self) -> bool:
        return self.key == "PRI"

    @property
    def is_nullable(self) -> str:
        """Nullability as rendered in documents."""
        return "YES" if self.nullable else "NO"


class TableInfo(BaseModel):
    """Table with its ordered column list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Table name")
    comment: str = Field(..., description="Table comment, the name when unset")
    columns: tuple[ColumnInfo, ...] = Field(
        default=(), description="Columns ordered by ordinal position"
    )

    def get_column(self, name: str) -> Optional[ColumnInfo]:
        """Get column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def primary_key_columns(self) -> list[str]:
        return [col.name for col in self.columns if col.is_primary_key]


class SchemaSnapshot(BaseModel):
    """Complete schema description produced by one introspection run."""

    model_config = ConfigDict(frozen=True)

    engine: EngineVariant = Field(..., description="Engine variant introspected")
    database: DatabaseInfo = Field(..., description="Database-level metadata")
    tables: tuple[TableInfo, ...] = Field(
        default=(), description="Tables in catalog order"
    )

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]

    def get_table(self, name: str) -> Optional[TableInfo]:
        """Get table by name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

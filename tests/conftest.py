"""Pytest configuration and shared fixtures for introspection tests"""

import os
from typing import Callable, Iterator, Optional

import pytest
from dotenv import load_dotenv
from sqlalchemy import Connection, Engine, create_engine, event, text

from db_doc.dialects import MySQLDialect

# Load environment variables
load_dotenv()


# ==================== Configuration Fixtures ====================


@pytest.fixture(scope="session")
def mysql_database_url() -> Optional[str]:
    """MySQL test database URL from environment"""
    return os.getenv("MYSQL_TEST_DATABASE_URL")


@pytest.fixture(scope="session")
def mssql_database_url() -> Optional[str]:
    """SQL Server test database URL from environment"""
    return os.getenv("MSSQL_TEST_DATABASE_URL")


@pytest.fixture(scope="session")
def pg_database_url() -> Optional[str]:
    """PostgreSQL test database URL from environment"""
    return os.getenv("PG_TEST_DATABASE_URL")


# ==================== SQLite Catalog Fixtures ====================


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    """In-memory SQLite engine with an attached information_schema database.

    The attached database lets the MySQL catalog queries run unchanged.
    """
    engine = create_engine("sqlite://")

    @event.listens_for(engine, "connect")
    def attach_information_schema(dbapi_conn, connection_record):
        dbapi_conn.execute("ATTACH DATABASE ':memory:' AS information_schema")

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_connection(sqlite_engine: Engine) -> Iterator[Connection]:
    """Open connection on the in-memory SQLite engine"""
    with sqlite_engine.connect() as conn:
        yield conn


class Catalog:
    """MySQL-shaped information_schema stored in SQLite"""

    def __init__(self, conn: Connection):
        self.conn = conn

    def create(self) -> "Catalog":
        self.conn.execute(
            text(
                "CREATE TABLE information_schema.tables "
                "(table_schema TEXT, table_name TEXT, table_comment TEXT)"
            )
        )
        self.conn.execute(
            text(
                "CREATE TABLE information_schema.columns ("
                "table_schema TEXT, table_name TEXT, column_name TEXT, "
                "ordinal_position INTEGER, column_type TEXT, column_key TEXT, "
                "is_nullable TEXT, column_comment TEXT, column_default TEXT)"
            )
        )
        # Committed so a rollback after a failed probe keeps the catalog
        self.conn.commit()
        return self

    def add_table(self, schema: str, name: str, comment: str = "") -> None:
        self.conn.execute(
            text(
                "INSERT INTO information_schema.tables "
                "VALUES (:schema, :name, :comment)"
            ),
            {"schema": schema, "name": name, "comment": comment},
        )
        self.conn.commit()

    def add_column(
        self,
        schema: str,
        table: str,
        name: str,
        position: int,
        column_type: str,
        key: str = "",
        nullable: str = "YES",
        comment: str = "",
        default: Optional[str] = None,
    ) -> None:
        self.conn.execute(
            text(
                "INSERT INTO information_schema.columns VALUES "
                "(:schema, :table, :name, :position, :type, :key, "
                ":nullable, :comment, :default)"
            ),
            {
                "schema": schema,
                "table": table,
                "name": name,
                "position": position,
                "type": column_type,
                "key": key,
                "nullable": nullable,
                "comment": comment,
                "default": default,
            },
        )
        self.conn.commit()


@pytest.fixture
def catalog(sqlite_connection: Connection) -> Catalog:
    """Empty MySQL-shaped catalog on the SQLite connection"""
    return Catalog(sqlite_connection).create()


@pytest.fixture
def shop_catalog(catalog: Catalog) -> Catalog:
    """Catalog for the 'shop' database: users (no comment) and orders"""
    catalog.add_table("shop", "users", "")
    catalog.add_table("shop", "orders", "order records")
    catalog.add_column("shop", "users", "id", 1, "int", "PRI", "NO")
    catalog.add_column("shop", "users", "email", 2, "varchar", "", "YES")
    catalog.add_column("shop", "orders", "id", 1, "bigint", "PRI", "NO")
    catalog.add_column("shop", "orders", "user_id", 2, "int", "MUL", "NO", "buyer")
    # Another database in the same catalog must not leak in
    catalog.add_table("other", "audit_log", "")
    return catalog


class FixtureMySQLDialect(MySQLDialect):
    """MySQL dialect whose probes are constant SELECTs SQLite can answer.

    A probe value of None yields a query returning no rows.
    """

    def __init__(
        self,
        version: Optional[str] = "8.0.36",
        charset: Optional[str] = "utf8mb4",
        collation: Optional[str] = "utf8mb4_general_ci",
    ):
        super().__init__()
        self.version = version
        self.charset = charset
        self.collation = collation

    def version_query(self) -> str:
        return self._constant(self.version)

    def charset_query(self) -> str:
        return self._constant(self.charset)

    def collation_query(self) -> str:
        return self._constant(self.collation)

    def _constant(self, value: Optional[str]) -> str:
        if value is None:
            return "SELECT 'unused' WHERE 1 = 0"
        return f"SELECT '{value}'"


@pytest.fixture
def make_dialect() -> Callable[..., MySQLDialect]:
    """Factory for MySQL dialects with constant probe answers"""
    return FixtureMySQLDialect


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "mysql: MySQL-specific tests")
    config.addinivalue_line("markers", "sqlserver: SQL Server-specific tests")
    config.addinivalue_line("markers", "postgresql: PostgreSQL-specific tests")
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring database"
    )

"""Unit Tests for the catalog query builders

Tests dialect dispatch and query text for all engine variants:
- Distinct, dialect-correct SQL per engine
- Database/table names embedded verbatim
- Unknown engines and probe kinds rejected
"""

import pytest

from db_doc.dialects import (
    MySQLDialect,
    PostgresDialect,
    ProbeKind,
    SQLServerDialect,
    build_column_query,
    build_probe_query,
    create_dialect,
)
from db_doc.errors import ConfigurationError
from db_doc.models import EngineVariant

ALL_ENGINES = list(EngineVariant)


class TestDialectFactory:
    """Test dialect selection."""

    @pytest.mark.parametrize(
        "engine,dialect_class",
        [
            (EngineVariant.MYSQL, MySQLDialect),
            (EngineVariant.SQLSERVER, SQLServerDialect),
            (EngineVariant.POSTGRESQL, PostgresDialect),
            (1, MySQLDialect),
            ("postgres", PostgresDialect),
        ],
    )
    def test_create_dialect(self, engine, dialect_class):
        """Test each selector resolves to its engine dialect."""
        dialect = create_dialect(engine)

        assert isinstance(dialect, dialect_class)
        assert dialect.engine is EngineVariant.parse(engine)

    def test_postgres_schema_defaults_to_public(self):
        """Test PostgreSQL documents public unless a schema is given."""
        assert create_dialect(EngineVariant.POSTGRESQL).schema == "public"
        assert create_dialect(EngineVariant.POSTGRESQL, schema="sales").schema == "sales"

    def test_sqlserver_schema_defaults_to_dbo(self):
        """Test SQL Server documents dbo unless a schema is given."""
        assert create_dialect(EngineVariant.SQLSERVER).schema == "dbo"
        assert create_dialect(EngineVariant.SQLSERVER, schema="audit").schema == "audit"

    def test_mysql_ignores_schema(self):
        """Test MySQL is scoped by database name alone."""
        query = create_dialect(EngineVariant.MYSQL, schema="audit").build_column_query(
            "users", "shop"
        )

        assert "audit" not in query

    def test_unknown_engine_raises(self):
        """Test an unsupported engine code is rejected."""
        with pytest.raises(ConfigurationError):
            create_dialect(99)


class TestProbeQueries:
    """Test probe query construction."""

    @pytest.mark.parametrize("kind", list(ProbeKind))
    def test_queries_distinct_per_engine(self, kind):
        """Test every probe kind has dialect-specific SQL."""
        queries = {
            build_probe_query(kind, engine, "shop") for engine in ALL_ENGINES
        }
        assert len(queries) == len(ALL_ENGINES)

    @pytest.mark.parametrize("kind", list(ProbeKind))
    @pytest.mark.parametrize("engine", ALL_ENGINES)
    def test_queries_never_empty(self, kind, engine):
        """Test no probe query is blank."""
        assert build_probe_query(kind, engine, "shop").strip()

    def test_accepts_probe_name_strings(self):
        """Test probe kinds can be given by name."""
        assert build_probe_query("version", EngineVariant.MYSQL) == "SELECT @@version"

    @pytest.mark.parametrize("kind", list(ProbeKind))
    def test_unknown_engine_raises(self, kind):
        """Test probes for an unsupported engine are rejected."""
        with pytest.raises(ConfigurationError):
            build_probe_query(kind, 99, "shop")

    def test_unknown_probe_kind_raises(self):
        """Test an unknown probe kind is rejected."""
        with pytest.raises(ConfigurationError):
            build_probe_query("row_count", EngineVariant.MYSQL, "shop")

    def test_mysql_probes(self):
        """Test MySQL probes read server variables."""
        assert build_probe_query(ProbeKind.VERSION, 1) == "SELECT @@version"
        assert "character_set_server" in build_probe_query(ProbeKind.CHARSET, 1)
        assert "collation_server" in build_probe_query(ProbeKind.COLLATION, 1)

    def test_sqlserver_probes(self):
        """Test SQL Server probes read server properties."""
        assert "@@VERSION" in build_probe_query(ProbeKind.VERSION, 2)
        assert "CodePage" in build_probe_query(ProbeKind.CHARSET, 2)
        assert "SERVERPROPERTY('Collation')" in build_probe_query(ProbeKind.COLLATION, 2)

    def test_postgres_probes(self):
        """Test PostgreSQL probes use SHOW and pg_database."""
        assert build_probe_query(ProbeKind.VERSION, 3) == "SHOW server_version"
        assert build_probe_query(ProbeKind.CHARSET, 3) == "SHOW server_encoding"
        assert "datcollate" in build_probe_query(ProbeKind.COLLATION, 3)


class TestTableListQueries:
    """Test table-list query construction."""

    def test_mysql_filters_by_database(self):
        """Test MySQL table list is filtered by database name."""
        query = build_probe_query(ProbeKind.TABLE_LIST, EngineVariant.MYSQL, "shop")

        assert "information_schema.tables" in query
        assert "table_schema = 'shop'" in query
        assert "TableName" in query and "TableComment" in query

    def test_mysql_requires_database_name(self):
        """Test MySQL table list needs a database name."""
        with pytest.raises(ConfigurationError):
            build_probe_query(ProbeKind.TABLE_LIST, EngineVariant.MYSQL, "")

    def test_sqlserver_reads_extended_properties(self):
        """Test SQL Server table comments come from MS_Description."""
        query = build_probe_query(ProbeKind.TABLE_LIST, EngineVariant.SQLSERVER, "shop")

        assert "sysobjects" in query
        assert "sys.extended_properties" in query
        assert "MS_Description" in query
        assert "nvarchar(4000)) AS TableComment" in query

    def test_sqlserver_table_list_scoped_to_schema(self):
        """Test SQL Server table list only reads the configured schema."""
        default = create_dialect(EngineVariant.SQLSERVER).build_probe_query(
            ProbeKind.TABLE_LIST, "shop"
        )
        audit = create_dialect(EngineVariant.SQLSERVER, schema="audit").build_probe_query(
            ProbeKind.TABLE_LIST, "shop"
        )

        assert "so.uid = SCHEMA_ID('dbo')" in default
        assert "so.uid = SCHEMA_ID('audit')" in audit

    def test_postgres_orders_by_name_within_schema(self):
        """Test PostgreSQL table list is schema-scoped and sorted."""
        query = create_dialect(3, schema="sales").build_probe_query(
            ProbeKind.TABLE_LIST, "shop"
        )

        assert "pg_class" in query
        assert "pg_description" in query
        assert "nspname = 'sales'" in query
        assert "ORDER BY a.relname" in query


class TestColumnQueries:
    """Test column query construction."""

    @pytest.mark.parametrize("engine", ALL_ENGINES)
    def test_table_name_verbatim(self, engine):
        """Test the table name is embedded as a literal."""
        assert "'order_items'" in build_column_query("order_items", engine, "shop")

    def test_distinct_per_engine(self):
        """Test each engine has its own column query."""
        queries = {
            build_column_query("users", engine, "shop") for engine in ALL_ENGINES
        }
        assert len(queries) == len(ALL_ENGINES)

    def test_mysql_uses_information_schema_in_ordinal_order(self):
        """Test MySQL columns come from information_schema in ordinal order."""
        query = build_column_query("users", EngineVariant.MYSQL, "shop")

        assert "information_schema.columns" in query
        assert "table_schema = 'shop'" in query
        assert "ORDER BY ordinal_position" in query

    def test_sqlserver_joins_catalog_views(self):
        """Test SQL Server columns come from the compatibility views."""
        query = build_column_query("users", EngineVariant.SQLSERVER, "shop")

        for fragment in ("syscolumns", "systypes", "syscomments", "sysindexkeys"):
            assert fragment in query
        assert "ORDER BY a.id, a.colorder" in query

    def test_sqlserver_columns_scoped_to_schema(self):
        """Test same-named tables in other schemas cannot add columns."""
        default = build_column_query("users", EngineVariant.SQLSERVER, "shop")
        audit = create_dialect(EngineVariant.SQLSERVER, schema="audit").build_column_query(
            "users", "shop"
        )

        assert "d.name = 'users'" in default
        assert "d.uid = SCHEMA_ID('dbo')" in default
        assert "d.uid = SCHEMA_ID('audit')" in audit

    def test_sqlserver_schema_name_escaped(self):
        """Test quotes in the schema name are doubled."""
        query = create_dialect(
            EngineVariant.SQLSERVER, schema="o'neil"
        ).build_column_query("users", "shop")

        assert "SCHEMA_ID('o''neil')" in query

    def test_sqlserver_precision_only_for_sized_types(self):
        """Test length and precision are only added to sized types."""
        query = build_column_query("users", EngineVariant.SQLSERVER, "shop")

        assert "WHEN b.name IN ('char', 'varchar', 'nchar', 'nvarchar'" in query
        assert "ELSE b.name" in query

    def test_postgres_comments_use_qualified_relation(self):
        """Test PostgreSQL comments are keyed by the qualified relation."""
        query = build_column_query("users", EngineVariant.POSTGRESQL, "shop")

        assert "pg_description" in query
        assert "quote_ident(c.table_schema)" in query
        assert "contype = 'p'" in query
        assert "ORDER BY c.ordinal_position" in query

    @pytest.mark.parametrize("engine", ALL_ENGINES)
    def test_quotes_in_names_escaped(self, engine):
        """Test quotes in table names are doubled."""
        query = build_column_query("o'brien", engine, "shop")

        assert "'o''brien'" in query

    @pytest.mark.parametrize("engine", ALL_ENGINES)
    def test_empty_table_name_rejected(self, engine):
        """Test an empty table name is rejected."""
        with pytest.raises(ConfigurationError):
            build_column_query("", engine, "shop")

    def test_unknown_engine_raises(self):
        """Test column queries for an unsupported engine are rejected."""
        with pytest.raises(ConfigurationError):
            build_column_query("users", 99, "shop")

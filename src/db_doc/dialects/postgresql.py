"""PostgreSQL catalog dialect."""

from typing import Optional

from db_doc.dialects.base import BaseDialect
from db_doc.models.schema import EngineVariant

DEFAULT_SCHEMA = "public"


class PostgresDialect(BaseDialect):
    """PostgreSQL comments live in pg_description, keyed by relation oid."""

    engine = EngineVariant.POSTGRESQL

    def __init__(self, schema: Optional[str] = None):
        super().__init__(schema or DEFAULT_SCHEMA)

    def version_query(self) -> str:
        return "SHOW server_version"

    def charset_query(self) -> str:
        return "SHOW server_encoding"

    def collation_query(self) -> str:
        # lc_collate is no longer a SHOW-able setting on PostgreSQL 16+
        return (
            "SELECT datcollate FROM pg_database "
            "WHERE datname = current_database()"
        )

    def table_list_query(self, database_name: str) -> str:
        """Ordinary tables of the configured schema, alphabetical."""
        return f"""
            SELECT a.relname     AS TableName,
                   b.description AS TableComment
            FROM pg_class a
            LEFT OUTER JOIN pg_description b
                   ON b.objsubid = 0
                  AND a.oid = b.objoid
                  AND b.classoid = CAST('pg_class' AS regclass)
            WHERE a.relnamespace = (
                SELECT oid FROM pg_namespace WHERE nspname = '{self._literal(self.schema)}'
            )
              AND a.relkind = 'r'
            ORDER BY a.relname
        """

    def column_query(self, table_name: str, database_name: str) -> str:
        table = self._literal(table_name)
        schema = self._literal(self.schema)
        return f"""
            SELECT c.column_name    AS ColName,
                   c.data_type      AS ColType,
                   CASE WHEN pk.colname IS NULL THEN '' ELSE 'PRI' END AS ColKey,
                   c.is_nullable    AS IsNullable,
                   pgd.description  AS ColComment,
                   c.column_default AS ColDefault
            FROM information_schema.columns c
            LEFT JOIN (
                SELECT pg_attribute.attname AS colname
                FROM pg_constraint
                INNER JOIN pg_class ON pg_constraint.conrelid = pg_class.oid
                INNER JOIN pg_namespace ON pg_class.relnamespace = pg_namespace.oid
                INNER JOIN pg_attribute ON pg_attribute.attrelid = pg_class.oid
                       AND pg_attribute.attnum = ANY(pg_constraint.conkey)
                WHERE pg_class.relname = '{table}'
                  AND pg_namespace.nspname = '{schema}'
                  AND pg_constraint.contype = 'p'
            ) pk ON pk.colname = c.column_name
            LEFT JOIN pg_description pgd
                   ON pgd.objoid = CAST(
                          quote_ident(c.table_schema) || '.' || quote_ident(c.table_name)
                          AS regclass
                      )
                  AND pgd.objsubid = c.ordinal_position
            WHERE c.table_schema = '{schema}'
              AND c.table_name = '{table}'
            ORDER BY c.ordinal_position
        """

"""MySQL (and MariaDB) catalog dialect."""

from db_doc.dialects.base import BaseDialect
from db_doc.errors import ConfigurationError
from db_doc.models.schema import EngineVariant


class MySQLDialect(BaseDialect):
    """MySQL exposes everything through information_schema."""

    engine = EngineVariant.MYSQL

    def version_query(self) -> str:
        return "SELECT @@version"

    def charset_query(self) -> str:
        return "SELECT @@character_set_server"

    def collation_query(self) -> str:
        return "SELECT @@collation_server"

    def table_list_query(self, database_name: str) -> str:
        """Tables of one database; MySQL calls schemas databases."""
        return f"""
            SELECT table_name    AS TableName,
                   table_comment AS TableComment
            FROM information_schema.tables
            WHERE table_schema = '{self._schema_literal(database_name)}'
        """

    def column_query(self, table_name: str, database_name: str) -> str:
        return f"""
            SELECT column_name    AS ColName,
                   column_type    AS ColType,
                   column_key     AS ColKey,
                   is_nullable    AS IsNullable,
                   column_comment AS ColComment,
                   column_default AS ColDefault
            FROM information_schema.columns
            WHERE table_schema = '{self._schema_literal(database_name)}'
              AND table_name = '{self._literal(table_name)}'
            ORDER BY ordinal_position
        """

    def _schema_literal(self, database_name: str) -> str:
        if not database_name:
            raise ConfigurationError("MySQL catalog queries require a database name")
        return self._literal(database_name)

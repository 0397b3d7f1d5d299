"""SQL Server catalog dialect."""

from typing import Any, Optional, Sequence

from db_doc.dialects.base import BaseDialect
from db_doc.models.schema import ColumnInfo, EngineVariant
from db_doc.utils.rows import strip_wrapping_parens

DEFAULT_SCHEMA = "dbo"


class SQLServerDialect(BaseDialect):
    """
    SQL Server keeps comments in extended properties.

    Tables and columns come from the compatibility views (sysobjects,
    syscolumns) joined to sys.extended_properties for MS_Description.
    The connection already targets the documented database, so queries
    are not qualified by database name; they are scoped to one schema.
    """

    engine = EngineVariant.SQLSERVER

    def __init__(self, schema: Optional[str] = None):
        super().__init__(schema or DEFAULT_SCHEMA)

    def version_query(self) -> str:
        return "SELECT @@VERSION"

    def charset_query(self) -> str:
        """Code page of the server collation (e.g. 1252, 65001 for UTF-8)."""
        return (
            "SELECT CAST(COLLATIONPROPERTY("
            "CAST(SERVERPROPERTY('Collation') AS nvarchar(128)), 'CodePage'"
            ") AS varchar(16))"
        )

    def collation_query(self) -> str:
        return "SELECT CAST(SERVERPROPERTY('Collation') AS nvarchar(128))"

    def table_list_query(self, database_name: str) -> str:
        """User tables and views of the schema with their MS_Description."""
        return f"""
            SELECT CAST(so.name AS nvarchar(500))   AS TableName,
                   CAST(sep.value AS nvarchar(4000)) AS TableComment
            FROM sysobjects so
            LEFT JOIN sys.extended_properties sep
                   ON sep.major_id = so.id
                  AND sep.minor_id = 0
                  AND sep.name = 'MS_Description'
            WHERE (so.xtype = 'U' OR so.xtype = 'V')
              AND so.uid = SCHEMA_ID('{self._literal(self.schema)}')
        """

    def column_query(self, table_name: str, database_name: str) -> str:
        # Length/precision only for types that carry one
        return f"""
            SELECT
                ColName = a.name,
                ColType = CASE
                    WHEN b.name IN ('char', 'varchar', 'nchar', 'nvarchar', 'binary', 'varbinary')
                        THEN b.name + '(' + CASE
                            WHEN COLUMNPROPERTY(a.id, a.name, 'PRECISION') = -1 THEN 'max'
                            ELSE CAST(COLUMNPROPERTY(a.id, a.name, 'PRECISION') AS varchar(10))
                        END + ')'
                    WHEN b.name IN ('decimal', 'numeric')
                        THEN b.name + '(' + CAST(a.xprec AS varchar(10)) + ','
                             + CAST(a.xscale AS varchar(10)) + ')'
                    WHEN b.name IN ('datetime2', 'datetimeoffset', 'time')
                        THEN b.name + '(' + CAST(a.xscale AS varchar(10)) + ')'
                    ELSE b.name
                END,
                ColKey = CASE WHEN EXISTS (
                    SELECT 1
                    FROM sysobjects
                    WHERE xtype = 'PK'
                      AND parent_obj = a.id
                      AND name IN (
                          SELECT name
                          FROM sysindexes
                          WHERE id = a.id
                            AND indid IN (
                                SELECT indid
                                FROM sysindexkeys
                                WHERE id = a.id AND colid = a.colid
                            )
                      )
                ) THEN 'PRI' ELSE '' END,
                IsNullable = CASE WHEN a.isnullable = 1 THEN 'YES' ELSE 'NO' END,
                ColComment = ISNULL(CAST(g.value AS nvarchar(4000)), ''),
                ColDefault = ISNULL(e.text, '')
            FROM syscolumns a
            LEFT JOIN systypes b ON a.xusertype = b.xusertype
            INNER JOIN sysobjects d
                    ON a.id = d.id AND d.xtype = 'U' AND d.name <> 'dtproperties'
            LEFT JOIN syscomments e ON a.cdefault = e.id
            LEFT JOIN sys.extended_properties g
                   ON a.id = g.major_id
                  AND a.colid = g.minor_id
                  AND g.name = 'MS_Description'
            WHERE d.name = '{self._literal(table_name)}'
              AND d.uid = SCHEMA_ID('{self._literal(self.schema)}')
            ORDER BY a.id, a.colorder
        """

    def decode_column_row(self, row: Sequence[Any]) -> ColumnInfo:
        """SQL Server stores defaults wrapped in parentheses: ((0)), (getdate())."""
        column = super().decode_column_row(row)
        if not column.default:
            return column
        return column.model_copy(
            update={"default": strip_wrapping_parens(column.default)}
        )

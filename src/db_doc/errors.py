"""Error taxonomy for schema introspection."""

from typing import Optional


class DbDocError(Exception):
    """Base class for all db-doc errors."""


class ConfigurationError(DbDocError, ValueError):
    """Configuration is missing or invalid (e.g. unknown engine variant)."""


class DatabaseConnectionError(DbDocError):
    """Connection could not be provisioned or failed its liveness check."""


class CatalogQueryError(DbDocError):
    """A single catalog query failed to execute."""

    def __init__(self, purpose: str, query: str, message: str = ""):
        self.purpose = purpose
        self.query = query
        detail = f": {message}" if message else ""
        super().__init__(f"Catalog query for {purpose} failed{detail}")


class IntrospectionError(DbDocError):
    """Structural catalog data could not be read; the run is aborted."""

    def __init__(self, phase: str, table: Optional[str] = None, message: str = ""):
        self.phase = phase
        self.table = table
        where = f"{phase} (table {table!r})" if table else phase
        detail = f": {message}" if message else ""
        super().__init__(f"Introspection failed during {where}{detail}")

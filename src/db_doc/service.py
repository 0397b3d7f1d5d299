"""Generation entry point: provision, introspect, hand off to a renderer."""

import logging
from typing import Optional, Protocol

from db_doc.core.assembler import introspect
from db_doc.core.connection import DatabaseConnection
from db_doc.models.config import DatabaseConfig
from db_doc.models.schema import SchemaSnapshot

logger = logging.getLogger(__name__)


class DocumentRenderer(Protocol):
    """Consumes one snapshot and writes documents in the selected format."""

    def __call__(self, snapshot: SchemaSnapshot, doc_type: str) -> None: ...


def generate(
    config: DatabaseConfig, renderer: Optional[DocumentRenderer] = None
) -> SchemaSnapshot:
    """
    Introspect the configured database and optionally render it.

    Args:
        config: Connection parameters, engine selector and output format
        renderer: Callable receiving the snapshot and config.doc_type

    Returns:
        The schema snapshot handed to the renderer

    Raises:
        DatabaseConnectionError: If the connection cannot be provisioned
        IntrospectionError: If tables or columns cannot be read
    """
    with DatabaseConnection(config) as database:
        with database.get_connection() as conn:
            snapshot = introspect(
                conn, config.engine, config.database, schema=config.schema_name
            )

    if renderer is not None:
        logger.info(
            f"Rendering {len(snapshot.tables)} tables as {config.doc_type}"
        )
        renderer(snapshot, config.doc_type)

    return snapshot

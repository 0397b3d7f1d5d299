"""Database connection management with SQLAlchemy."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Connection, Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from db_doc.errors import DatabaseConnectionError
from db_doc.models.config import DatabaseConfig
from db_doc.models.schema import EngineVariant

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Provisions validated connections for an introspection run."""

    def __init__(self, config: DatabaseConfig):
        """
        Initialize database connection.

        Args:
            config: Database configuration with engine selector and credentials
        """
        self.config = config
        self.engine: Optional[Engine] = None

    def initialize(self) -> None:
        """Create the SQLAlchemy engine."""
        if self.engine is not None:
            return  # Already initialized

        try:
            self.engine = create_engine(
                self.config.url,
                pool_pre_ping=True,  # Verify connections before using
                echo=self.config.echo_sql,
                # Each catalog read stands alone; a failed probe must not
                # poison the statements that follow it
                isolation_level="AUTOCOMMIT",
            )
        except (SQLAlchemyError, ImportError) as e:
            raise DatabaseConnectionError(
                f"Cannot create engine for {self.config.sanitized_url}: {e}"
            ) from e

        logger.info(f"Initialized {self.dialect} engine for {self.config.sanitized_url}")

    def dispose(self) -> None:
        """Dispose of the connection pool and cleanup resources."""
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """
        Get a validated connection as a context manager.

        Yields:
            Connection that passed a liveness check

        Raises:
            RuntimeError: If engine not initialized
            DatabaseConnectionError: If connecting or the liveness check fails
        """
        if self.engine is None:
            raise RuntimeError(
                "DatabaseConnection not initialized. Call initialize() first."
            )

        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                f"Cannot connect to {self.config.sanitized_url}: {e}"
            ) from e

        with conn:
            self._validate(conn)
            yield conn

    def _validate(self, conn: Connection) -> None:
        """Liveness check before handing the connection out."""
        try:
            conn.execute(text("SELECT 1")).close()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                f"Liveness check failed for {self.config.sanitized_url}: {e}"
            ) from e

    @property
    def engine_variant(self) -> EngineVariant:
        return self.config.engine

    @property
    def dialect(self) -> str:
        """Get database dialect name."""
        return self.config.engine.name.lower()

    @property
    def is_initialized(self) -> bool:
        """Check if engine is initialized."""
        return self.engine is not None

    def test_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            with self.get_connection():
                pass
            return True
        except DatabaseConnectionError as e:
            logger.warning(f"Connection test failed: {e}")
            return False

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.dispose()

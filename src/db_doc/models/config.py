"""Database configuration model."""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy.engine import URL

from db_doc.errors import ConfigurationError
from db_doc.models.schema import EngineVariant


logger = logging.getLogger(__name__)

# Default SQLAlchemy driver per engine (synchronous DBAPI drivers)
DEFAULT_DRIVERS = {
    EngineVariant.MYSQL: "mysql+pymysql",
    EngineVariant.SQLSERVER: "mssql+pymssql",
    EngineVariant.POSTGRESQL: "postgresql+psycopg",
}

DEFAULT_PORTS = {
    EngineVariant.MYSQL: 3306,
    EngineVariant.SQLSERVER: 1433,
    EngineVariant.POSTGRESQL: 5432,
}

# Environment variable names read by DatabaseConfig.from_env()
ENV_FIELDS = {
    "engine": "DB_TYPE",
    "host": "DB_HOST",
    "port": "DB_PORT",
    "user": "DB_USER",
    "password": "DB_PASSWORD",
    "database": "DB_NAME",
    "schema_name": "DB_SCHEMA",
    "doc_type": "DOC_TYPE",
    "driver": "DB_DRIVER",
    "echo_sql": "DB_ECHO_SQL",
}


class DatabaseConfig(BaseModel):
    """Connection parameters and engine selection for one introspection run."""

    engine: EngineVariant = Field(
        ...,
        description="Engine variant (1/mysql, 2/sqlserver, 3/postgresql)",
    )
    host: str = Field(default="127.0.0.1", description="Database host")
    port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Database port (engine default when unset)",
    )
    user: str = Field(default="", description="Login user")
    password: str = Field(default="", description="Login password")
    database: str = Field(..., min_length=1, description="Database to document")
    schema_name: Optional[str] = Field(
        default=None,
        description="Schema to document (PostgreSQL defaults to public, SQL Server to dbo)",
    )
    doc_type: str = Field(
        default="markdown",
        description="Output format selector handed to the document renderer",
    )
    driver: Optional[str] = Field(
        default=None,
        description="SQLAlchemy drivername override (e.g. mysql+mysqldb)",
    )
    echo_sql: bool = Field(
        default=False,
        description="Echo SQL statements to the log",
    )

    @field_validator("engine", mode="before")
    @classmethod
    def validate_engine(cls, v):
        """Accept integer codes and engine names."""
        return EngineVariant.parse(v)

    @field_validator("doc_type")
    @classmethod
    def normalize_doc_type(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def resolved_port(self) -> int:
        """Configured port, or the engine's default port."""
        return self.port if self.port is not None else DEFAULT_PORTS[self.engine]

    @property
    def drivername(self) -> str:
        return self.driver or DEFAULT_DRIVERS[self.engine]

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for this configuration."""
        return URL.create(
            self.drivername,
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.resolved_port,
            database=self.database,
        )

    @property
    def sanitized_url(self) -> str:
        """Connection URL with the password masked, safe for logs."""
        return self.url.render_as_string(hide_password=True)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "DatabaseConfig":
        """
        Build configuration from a plain mapping.

        Args:
            values: Field values keyed by field name

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If a value is missing or invalid
        """
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid database configuration: {e}") from e

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DatabaseConfig":
        """
        Build configuration from environment variables.

        Loads a .env file first (values already in the environment win).

        Args:
            env_file: Optional path to a .env file
            environ: Mapping to read instead of os.environ

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If a required variable is missing or invalid
        """
        if environ is None:
            load_dotenv(env_file)
            environ = os.environ

        values = {
            field: environ.get(env_name)
            for field, env_name in ENV_FIELDS.items()
            if environ.get(env_name) not in (None, "")
        }

        for field in ("engine", "database"):
            if field not in values:
                raise ConfigurationError(
                    f"{ENV_FIELDS[field]} environment variable must be set"
                )

        config = cls.from_mapping(values)
        logger.info(
            f"Loaded {config.engine.name} configuration for {config.sanitized_url}"
        )
        return config

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "engine": 1,
                    "host": "localhost",
                    "port": 3306,
                    "user": "root",
                    "password": "secret",
                    "database": "shop",
                    "doc_type": "markdown",
                }
            ]
        }
    }

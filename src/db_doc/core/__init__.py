"""Core introspection components."""

from .assembler import SchemaAssembler, introspect
from .connection import DatabaseConnection
from .reader import CatalogReader

__all__ = ["DatabaseConnection", "CatalogReader", "SchemaAssembler", "introspect"]

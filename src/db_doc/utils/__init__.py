"""Utility modules for schema introspection."""

from db_doc.utils.rows import parse_key, parse_nullable, row_text, strip_wrapping_parens
from db_doc.utils.serialization import dumps, snapshot_to_dict, snapshot_to_json

__all__ = [
    "row_text",
    "parse_nullable",
    "parse_key",
    "strip_wrapping_parens",
    "dumps",
    "snapshot_to_dict",
    "snapshot_to_json",
]

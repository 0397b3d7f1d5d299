"""JSON serialization of schema snapshots using orjson.

Renderers that live outside this package receive the snapshot either as
the pydantic model itself or as a plain JSON document built here.
"""

from typing import Any

import orjson

from db_doc.models.schema import SchemaSnapshot


def _default_handler(obj: Any) -> Any:
    """
    Custom default handler for types orjson doesn't handle natively.

    Raises:
        TypeError: If object cannot be serialized
    """
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")

    if isinstance(obj, (set, frozenset)):
        return list(obj)

    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def snapshot_to_dict(snapshot: SchemaSnapshot) -> dict[str, Any]:
    """
    Convert a snapshot into plain Python data.

    The engine is rendered by name and each column carries the
    "YES"/"NO" nullability marker documents display.

    Args:
        snapshot: Schema snapshot

    Returns:
        Dictionary with database info and ordered tables/columns
    """
    return {
        "engine": snapshot.engine.name.lower(),
        "database": snapshot.database.model_dump(),
        "tables": [
            {
                "name": table.name,
                "comment": table.comment,
                "columns": [
                    {**column.model_dump(), "is_nullable": column.is_nullable}
                    for column in table.columns
                ],
            }
            for table in snapshot.tables
        ],
    }


def snapshot_to_json(snapshot: SchemaSnapshot, indent: bool = False) -> str:
    """
    Serialize a snapshot to a JSON string.

    Args:
        snapshot: Schema snapshot
        indent: Pretty-print with two-space indentation

    Returns:
        JSON string
    """
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(
        snapshot_to_dict(snapshot), default=_default_handler, option=option
    ).decode("utf-8")


def dumps(obj: Any) -> str:
    """
    Serialize object to JSON string using orjson.

    Args:
        obj: Object to serialize

    Returns:
        JSON string
    """
    return orjson.dumps(obj, default=_default_handler).decode("utf-8")

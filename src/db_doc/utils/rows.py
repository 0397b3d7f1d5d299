"""Helpers for decoding catalog result rows."""

from typing import Any, Sequence


def row_text(row: Sequence[Any], index: int) -> str:
    """
    Read a result column as text.

    Missing trailing columns and NULLs become an empty string; bytes
    (returned by some drivers for catalog columns) are decoded as UTF-8.

    Args:
        row: Result row (tuple-like)
        index: Zero-based column position

    Returns:
        Column value as a string
    """
    if index >= len(row):
        return ""

    value = row[index]
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def parse_nullable(value: Any) -> bool:
    """Interpret a catalog nullability marker ('YES'/'NO', bool or int)."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    return str(value).strip().upper() in {"YES", "Y", "TRUE", "1"}


def parse_key(value: str) -> str:
    """Keep only primary-key membership ('PRI'); other key roles are dropped."""
    return "PRI" if value.strip().upper() == "PRI" else ""


def strip_wrapping_parens(value: str) -> str:
    """Remove balanced parentheses wrapping a whole expression: '((0))' -> '0'."""
    while value.startswith("(") and value.endswith(")") and _wraps(value):
        value = value[1:-1]
    return value


def _wraps(value: str) -> bool:
    """True when the first '(' is closed by the final ')'."""
    depth = 0
    for i, char in enumerate(value):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i == len(value) - 1
    return False

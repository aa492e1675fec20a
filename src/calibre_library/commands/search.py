"""Helpers for building calibre search expressions.

Only quoting is handled here; the search grammar itself belongs to calibre.
"""


def quote_search_value(value: str) -> str:
    """Quote a value for use inside a calibre search expression."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def exact_match(field: str, value: str) -> str:
    """Build an exact-match expression, e.g. authors:"=Jane Austen"."""
    return f"{field}:{quote_search_value(f'={value}')}"


def id_match(book_id: int) -> str:
    return f"id:{book_id}"

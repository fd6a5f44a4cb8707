"""
Row → TextMatch conversion shared by every dialect.

The dialect builds the SELECT; this module runs it on a DB-API
connection and turns each row into zero or more TextMatch values.

The server-side LIKE only narrows the candidates: depending on the
engine's collation it may be case-insensitive. Every value is checked
again here with Python's `in`, which is ordinal and case-sensitive, so
the reported matches are exact substring hits on every engine.

The generator is forward-only. Drain it (or .close() it) before running
another statement on the same connection.
"""

import logging

from .errors import InvalidStateError
from .models import TextMatch

logger = logging.getLogger(__name__)


def as_string(value) -> str:
    """Driver value → str. Bytes are decoded as UTF-8 (bad bytes become U+FFFD); everything else via str()."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", "replace")
    return str(value)


def column_index(description) -> dict[str, int]:
    """Map column names from cursor.description to their positions."""
    return {col[0]: i for i, col in enumerate(description or ())}


def iter_text_matches(connection, table_def, query, substring):
    """
    Execute `query` and yield a TextMatch per (row, text column) hit.

    Args:
        connection: open DB-API connection
        table_def:  TableDefinition the query was built for; its
                    primary-key and text columns must all be selected
        query:      complete SELECT, no bind parameters
        substring:  literal text to look for

    Yields:
        TextMatch, one row at a time.

    Raises:
        InvalidStateError: a primary-key column is NULL, or a selected
                           column is missing from the result set.
    """
    logger.debug("search %s: %s", table_def.name, query)
    cursor = connection.cursor()
    try:
        cursor.execute(query)
        positions = column_index(cursor.description)
        missing = set(table_def.pertinent_columns()) - set(positions)
        if missing:
            raise InvalidStateError(
                f"result set for {table_def.name} lacks column(s): {', '.join(sorted(missing))}"
            )

        while True:
            row = cursor.fetchone()
            if row is None:
                break

            key = {}
            for column in table_def.primary_key_columns:
                value = row[positions[column]]
                if value is None:
                    raise InvalidStateError(
                        f"primary key column {column!r} of {table_def.name} is NULL"
                    )
                key[column] = as_string(value)

            for column in table_def.text_columns:
                value = row[positions[column]]
                if value is None:
                    continue
                text = as_string(value)
                if substring in text:
                    yield TextMatch(key, column, text)
    finally:
        cursor.close()

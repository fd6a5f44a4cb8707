"""
SQL escaping helpers.

Pure string transforms, no I/O. Every dialect builds its statements
from these; each one picks its own identifier quote characters:

    MySQL       `name`
    SQL Server  [name]      (only ] is doubled)
    the rest    "name"
"""

from .errors import InvalidArgumentError

LIKE_METACHARACTERS = "%_["


def _require_text(value, what):
    if value is None:
        raise InvalidArgumentError(f"{what} must not be None")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{what} must be a string, got {type(value).__name__}")


def escape_identifier(identifier: str, quote_char: str = '"') -> str:
    """Double every quote_char so the identifier survives inside quote_char…quote_char."""
    _require_text(identifier, "identifier")
    return identifier.replace(quote_char, quote_char * 2)


def escape_string_literal(value: str) -> str:
    """Double every single quote so the value survives inside '…'."""
    _require_text(value, "value")
    return value.replace("'", "''")


def escape_like_pattern(value: str, escape_char: str = "\\",
                        metacharacters: str = LIKE_METACHARACTERS) -> str:
    """
    Make `value` match literally inside LIKE '%…%' ESCAPE '<escape_char>'.

    The escape character itself is doubled first — otherwise the
    prefixes added for the metacharacters would be doubled too.
    """
    _require_text(value, "value")
    if not isinstance(escape_char, str) or len(escape_char) != 1:
        raise InvalidArgumentError(f"escape_char must be one character, got {escape_char!r}")

    escaped = value.replace(escape_char, escape_char * 2)
    for meta in metacharacters:
        if meta != escape_char:
            escaped = escaped.replace(meta, escape_char + meta)
    return escaped


def quote_identifier(identifier: str, open_quote: str = '"', close_quote: str = None) -> str:
    """Escape and wrap: quote_identifier('a"b') → '"a""b"'."""
    close_quote = close_quote or open_quote
    return f"{open_quote}{escape_identifier(identifier, close_quote)}{close_quote}"

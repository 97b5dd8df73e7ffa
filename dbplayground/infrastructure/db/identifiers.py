"""
Helpers for placing user-supplied names in identifier position of SQL text.
"""

import re

_UNSAFE_IDENTIFIER_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_identifier(identifier: str) -> str:
    """Remove every character outside ``[A-Za-z0-9_]``.

    Never fails: an input made only of invalid characters becomes an empty
    string, which the engine rejects when the statement runs.
    """
    return _UNSAFE_IDENTIFIER_CHARS.sub("", identifier)


def quote_identifier(identifier: str) -> str:
    """Sanitize ``identifier`` and wrap it in double quotes."""
    return f'"{sanitize_identifier(identifier)}"'

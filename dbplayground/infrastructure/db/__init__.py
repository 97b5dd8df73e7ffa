"""
Database infrastructure package - Public Interface.

Pooled connections, catalog introspection, DDL builders and the row gateway.
"""

from .connection import DatabaseManager, translate_database_error
from .ddl import build_create_table, build_drop_table
from .identifiers import quote_identifier, sanitize_identifier
from .introspection import SchemaIntrospector

__all__ = [
    "DatabaseManager",
    "SchemaIntrospector",
    "build_create_table",
    "build_drop_table",
    "quote_identifier",
    "sanitize_identifier",
    "translate_database_error",
]

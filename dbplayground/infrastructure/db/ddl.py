"""
Builders for data-definition statements.

These are pure functions from structured input to SQL text so they can be
checked without a running engine. Column types and default values are
interpolated verbatim; the create-table form is an admin tool.
"""

from typing import List, Sequence

from ...core.constants import DEFAULT_VECTOR_DIMENSIONS
from ...schemas.tables import ColumnDefinition
from .identifiers import quote_identifier


def build_column_definition(column: ColumnDefinition) -> str:
    definition = f'  "{column.name}" {column.type}'

    if column.type == "vector":
        definition += f"({column.default_value or DEFAULT_VECTOR_DIMENSIONS})"

    if column.is_primary_key:
        definition += " PRIMARY KEY"
    if column.is_unique:
        definition += " UNIQUE"
    if not column.is_nullable:
        definition += " NOT NULL"

    if column.has_default:
        if column.type == "JSONB":
            definition += f" DEFAULT '{column.default_value or '{}'}'::jsonb"
        elif column.type == "TIMESTAMP":
            definition += " DEFAULT CURRENT_TIMESTAMP"
        elif column.default_value:
            definition += f" DEFAULT {column.default_value}"

    return definition


def has_foreign_key(column: ColumnDefinition) -> bool:
    """A foreign key clause needs both the referenced table and column."""
    return bool(column.is_foreign_key and column.reference_table and column.reference_column)


def build_foreign_key(column: ColumnDefinition) -> str:
    clause = (
        f'  FOREIGN KEY ("{column.name}") '
        f'REFERENCES "{column.reference_table}"("{column.reference_column}")'
    )
    if column.on_delete:
        clause += f" ON DELETE {column.on_delete}"
    return clause


def build_create_table(table_name: str, columns: Sequence[ColumnDefinition]) -> str:
    """
    Build a ``CREATE TABLE IF NOT EXISTS`` statement.

    The table name is quoted but not sanitized. Re-running the statement
    against an existing table leaves its structure untouched.
    """
    lines: List[str] = [build_column_definition(column) for column in columns]
    lines.extend(build_foreign_key(column) for column in columns if has_foreign_key(column))

    query = f'CREATE TABLE IF NOT EXISTS "{table_name}" (\n'
    query += ",\n".join(lines)
    query += "\n);"
    return query


def build_drop_table(table_name: str) -> str:
    return f"DROP TABLE IF EXISTS {quote_identifier(table_name)} CASCADE;"

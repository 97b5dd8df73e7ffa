import logging
from typing import Any, Dict, List

from ...core.constants import CATALOG_SCHEMA
from .connection import DatabaseManager, Row
from .identifiers import quote_identifier, sanitize_identifier

logger = logging.getLogger(__name__)

LIST_TABLES_SQL = """
    SELECT
      table_name,
      ARRAY_AGG(
        json_build_object(
          'name', column_name,
          'type', data_type
        )
      ) AS columns
    FROM information_schema.columns
    WHERE table_schema = :schema
    GROUP BY table_name
"""

DESCRIBE_COLUMNS_SQL = """
    SELECT column_name, data_type, column_default, is_nullable
    FROM information_schema.columns
    WHERE table_name = :table_name AND table_schema = :schema
"""

COLUMN_NAMES_SQL = """
    SELECT column_name
    FROM information_schema.columns
    WHERE table_name = :table_name AND table_schema = :schema
"""


class SchemaIntrospector:
    """Reads table and column metadata from the engine's catalog.

    Column order is whatever the catalog returns; callers must not rely on it.
    """

    def __init__(self, database: DatabaseManager, schema: str = CATALOG_SCHEMA):
        self.database = database
        self.schema = schema

    async def list_tables(self) -> List[Dict[str, Any]]:
        rows = await self.database.fetch_all(
            LIST_TABLES_SQL, {"schema": self.schema}, operation="list tables"
        )
        return [
            {"table_name": row["table_name"], "columns": list(row["columns"] or [])}
            for row in rows
        ]

    async def get_columns(self, table_name: str) -> List[Row]:
        return await self.database.fetch_all(
            DESCRIBE_COLUMNS_SQL,
            {"table_name": sanitize_identifier(table_name), "schema": self.schema},
            operation="describe table",
        )

    async def get_column_names(self, table_name: str) -> List[str]:
        rows = await self.database.fetch_all(
            COLUMN_NAMES_SQL,
            {"table_name": sanitize_identifier(table_name), "schema": self.schema},
            operation="read column names",
        )
        return [row["column_name"] for row in rows]

    async def describe_table(self, table_name: str) -> Dict[str, Any]:
        """Return column metadata and every current row of the table.

        The two reads are separate autocommitted statements.
        """
        columns = await self.get_columns(table_name)
        data = await self.database.fetch_all(
            f"SELECT * FROM {quote_identifier(table_name)}", operation="fetch table data"
        )
        logger.debug("Described table %s: %d columns, %d rows", table_name, len(columns), len(data))
        return {"columns": columns, "data": data}

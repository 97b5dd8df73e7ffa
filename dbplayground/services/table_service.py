from typing import Any, Dict, List, Sequence

from ..core.exceptions import DatabaseError
from ..infrastructure.db.connection import DatabaseManager
from ..infrastructure.db.ddl import build_create_table, build_drop_table
from ..infrastructure.db.introspection import SchemaIntrospector
from ..schemas.tables import ColumnDefinition
from .base import BaseService


class TableService(BaseService):
    """Catalog reads and table-level DDL."""

    def __init__(self, database: DatabaseManager):
        super().__init__(database)
        self.introspector = SchemaIntrospector(database)

    async def list_tables(self) -> List[Dict[str, Any]]:
        try:
            return await self.introspector.list_tables()
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to fetch database tables", include_details=False)

    async def describe_table(self, table_name: str) -> Dict[str, Any]:
        try:
            return await self.introspector.describe_table(table_name)
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to fetch table data")

    async def create_table(self, table_name: str, columns: Sequence[ColumnDefinition]) -> str:
        """Create the table and return the statement that was executed."""
        query = build_create_table(table_name, columns)
        self.log_operation("create table", {"table": table_name, "columns": len(columns)})
        try:
            await self.database.execute_raw(query, operation="create table")
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to create table")
        return query

    async def drop_table(self, table_name: str) -> None:
        self.log_operation("drop table", {"table": table_name})
        try:
            await self.database.execute_raw(build_drop_table(table_name), operation="drop table")
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to delete table")

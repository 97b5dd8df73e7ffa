from typing import Any, Dict, List, Mapping, Optional

from ..core.exceptions import DatabaseError
from ..infrastructure.db.connection import DatabaseManager
from ..infrastructure.db.repositories.row_repository import RowId, RowRepository
from .base import BaseService


class RowService(BaseService):
    """Row CRUD for the table endpoints."""

    def __init__(self, database: DatabaseManager):
        super().__init__(database)
        self.rows = RowRepository(database)

    async def list_rows(self, table_name: str) -> List[Dict[str, Any]]:
        try:
            return await self.rows.list_rows(table_name)
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to fetch table data")

    async def insert_row(self, table_name: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            return await self.rows.insert(table_name, fields)
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to insert data")

    async def update_row(
        self, table_name: str, row_id: Optional[RowId], fields: Mapping[str, Any]
    ) -> Dict[str, Any]:
        try:
            return await self.rows.update(table_name, row_id, fields)
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to update data")

    async def delete_row(self, table_name: str, row_id: Optional[RowId]) -> Dict[str, Any]:
        try:
            return await self.rows.delete(table_name, row_id)
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to delete data")

from typing import Any, Dict, List

from ..core.exceptions import DatabaseError
from .base import BaseService

# Run in order, one statement per call.
INIT_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
      id SERIAL PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email VARCHAR(255) UNIQUE NOT NULL,
      created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
      updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE OR REPLACE FUNCTION update_updated_at_column()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.updated_at = CURRENT_TIMESTAMP;
        RETURN NEW;
    END;
    $$ language 'plpgsql'
    """,
    "DROP TRIGGER IF EXISTS update_users_updated_at ON users",
    """
    CREATE TRIGGER update_users_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column()
    """,
]


class QueryService(BaseService):
    """Raw SQL execution and the example-schema bootstrap."""

    async def execute(self, query: str) -> List[Dict[str, Any]]:
        """Run caller-supplied SQL of any statement kind."""
        self.log_operation("raw query", {"length": len(query)})
        try:
            return await self.database.execute_raw(query, operation="raw query")
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to execute query")

    async def initialize(self) -> None:
        """Ensure the example ``users`` table and its updated-at trigger exist."""
        self.log_operation("initialize database")
        try:
            for statement in INIT_STATEMENTS:
                await self.database.execute_raw(statement, operation="initialize")
        except DatabaseError as e:
            self.handle_database_error(e, "Failed to initialize database", include_details=False)

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ....core.exceptions import BadRequestError, DatabaseError, NotFoundError, ValidationException
from ..connection import DatabaseManager, Row
from ..identifiers import quote_identifier, sanitize_identifier
from ..introspection import SchemaIntrospector

logger = logging.getLogger(__name__)

Statement = Tuple[str, Dict[str, Any]]
RowId = Union[int, str]


def filter_fields(fields: Mapping[str, Any], exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Drop empty-string values and excluded keys, keeping insertion order.

    Legitimate empty strings are dropped too; the column then takes its
    default or NULL.
    """
    excluded = set(exclude)
    return {
        key: value
        for key, value in fields.items()
        if value != "" and key not in excluded
    }


def _bind_value(value: Any) -> Any:
    # Objects and arrays only make sense for json/jsonb columns.
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def build_select(table_name: str) -> Statement:
    return f"SELECT * FROM {quote_identifier(table_name)}", {}


def build_insert(table_name: str, fields: Mapping[str, Any]) -> Statement:
    table = quote_identifier(table_name)
    if not fields:
        return f"INSERT INTO {table} DEFAULT VALUES RETURNING *", {}

    columns = ", ".join(quote_identifier(key) for key in fields)
    placeholders = ", ".join(f":p{index}" for index in range(1, len(fields) + 1))
    params = {
        f"p{index}": _bind_value(value)
        for index, value in enumerate(fields.values(), start=1)
    }
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *", params


def build_update(table_name: str, row_id: RowId, fields: Mapping[str, Any]) -> Statement:
    updates = ", ".join(
        f"{quote_identifier(key)} = :p{index}"
        for index, key in enumerate(fields, start=2)
    )
    params: Dict[str, Any] = {"p1": row_id}
    params.update(
        (f"p{index}", _bind_value(value))
        for index, value in enumerate(fields.values(), start=2)
    )
    return f"UPDATE {quote_identifier(table_name)} SET {updates} WHERE id = :p1 RETURNING *", params


def build_delete(table_name: str, row_id: RowId) -> Statement:
    return f"DELETE FROM {quote_identifier(table_name)} WHERE id = :p1 RETURNING *", {"p1": row_id}


class RowRepository:
    """
    Row-level CRUD against an arbitrary table.

    Only the sanitized table and column names are interpolated into SQL text;
    every value is a bound parameter.
    """

    def __init__(self, database: DatabaseManager, introspector: Optional[SchemaIntrospector] = None):
        self.database = database
        self.introspector = introspector or SchemaIntrospector(database)

    async def _validate_columns(self, table_name: str, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        known = await self.introspector.get_column_names(table_name)
        if not known:
            # Unknown table: let the engine report the missing relation.
            return
        unknown = [key for key in fields if sanitize_identifier(key) not in known]
        if unknown:
            raise ValidationException(
                message="Unknown columns",
                field=unknown[0],
                details=f"Table {sanitize_identifier(table_name)} has no column(s): {', '.join(unknown)}",
            )

    async def list_rows(self, table_name: str) -> List[Row]:
        sql, params = build_select(table_name)
        return await self.database.fetch_all(sql, params, operation="select")

    async def insert(self, table_name: str, fields: Mapping[str, Any]) -> Row:
        values = filter_fields(fields)
        await self._validate_columns(table_name, values)

        sql, params = build_insert(table_name, values)
        rows = await self.database.fetch_all(sql, params, operation="insert")
        if not rows:
            raise DatabaseError(
                message="Insert returned no row",
                operation="insert",
                details=f"INSERT INTO {sanitize_identifier(table_name)} RETURNING * produced no row",
            )
        logger.info("Inserted row into %s", sanitize_identifier(table_name))
        return rows[0]

    async def update(self, table_name: str, row_id: Optional[RowId], fields: Mapping[str, Any]) -> Row:
        if row_id is None or row_id == "":
            raise NotFoundError(message="Record not found")

        values = filter_fields(fields, exclude=("id",))
        if not values:
            raise ValidationException(message="No fields to update")
        await self._validate_columns(table_name, values)

        sql, params = build_update(table_name, row_id, values)
        rows = await self.database.fetch_all(sql, params, operation="update")
        if not rows:
            raise NotFoundError(resource_id=row_id, message="Record not found")
        logger.info("Updated row %s in %s", row_id, sanitize_identifier(table_name))
        return rows[0]

    async def delete(self, table_name: str, row_id: Optional[RowId]) -> Row:
        if row_id is None or row_id == "":
            raise BadRequestError(message="ID is required")

        sql, params = build_delete(table_name, row_id)
        rows = await self.database.fetch_all(sql, params, operation="delete")
        if not rows:
            raise NotFoundError(resource_id=row_id, message="Record not found")
        logger.info("Deleted row %s from %s", row_id, sanitize_identifier(table_name))
        return rows[0]

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from dbplayground.interfaces.dependencies import get_row_service, get_table_service
from dbplayground.schemas.tables import (
    CreateTableRequest,
    CreateTableResponse,
    DeleteTableRequest,
    FieldMap,
    MessageResponse,
    RowResponse,
    TableDataResponse,
    TableListResponse,
    UpdateRowRequest,
)
from dbplayground.services.row_service import RowService
from dbplayground.services.table_service import TableService

router = APIRouter()


@router.get("", response_model=TableListResponse)
async def list_tables(
    table_service: TableService = Depends(get_table_service),
) -> TableListResponse:
    """List every table in the public schema with its columns"""
    tables = await table_service.list_tables()
    return TableListResponse(tables=tables)


# Literal paths are declared before the /{table_name} routes so they take precedence.
@router.post("/create", response_model=CreateTableResponse)
async def create_table(
    request: CreateTableRequest,
    table_service: TableService = Depends(get_table_service),
) -> CreateTableResponse:
    """Create a table from a list of column definitions"""
    query = await table_service.create_table(request.table_name, request.columns)
    return CreateTableResponse(message="Table created successfully", query=query)


@router.post("/delete", response_model=MessageResponse)
async def delete_table(
    request: DeleteTableRequest,
    table_service: TableService = Depends(get_table_service),
) -> MessageResponse:
    """Drop a table and everything depending on it"""
    await table_service.drop_table(request.table_name)
    return MessageResponse(message=f"Table {request.table_name} deleted successfully")


@router.get("/{table_name}", response_model=TableDataResponse)
async def get_table_data(
    table_name: str,
    table_service: TableService = Depends(get_table_service),
) -> TableDataResponse:
    """Column metadata and all rows of one table"""
    described = await table_service.describe_table(table_name)
    return TableDataResponse(data=described["data"], columns=described["columns"])


@router.post("/{table_name}", response_model=RowResponse)
async def insert_row(
    table_name: str,
    fields: FieldMap = Body(...),
    row_service: RowService = Depends(get_row_service),
) -> RowResponse:
    row = await row_service.insert_row(table_name, fields)
    return RowResponse(data=row)


@router.put("/{table_name}", response_model=RowResponse)
async def update_row(
    table_name: str,
    request: UpdateRowRequest,
    row_service: RowService = Depends(get_row_service),
) -> RowResponse:
    row = await row_service.update_row(table_name, request.id, request.data)
    return RowResponse(data=row)


@router.delete("/{table_name}", response_model=RowResponse)
async def delete_row(
    table_name: str,
    id: Optional[str] = Query(None, description="Primary key of the row to delete"),
    row_service: RowService = Depends(get_row_service),
) -> RowResponse:
    row = await row_service.delete_row(table_name, id)
    return RowResponse(data=row)

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

OnDeleteAction = Literal["CASCADE", "SET NULL", "RESTRICT", "NO ACTION"]

# Value of one column in a row payload. Objects and arrays are accepted for JSON columns.
FieldValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, Dict[str, Any], List[Any], None]
FieldMap = Dict[str, FieldValue]


def encode_binary(value: Any) -> Any:
    """Render bytea values in PostgreSQL's hex text form ('\\x9f00ff'), including inside arrays."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "\\x" + bytes(value).hex()
    if isinstance(value, list):
        return [encode_binary(item) for item in value]
    return value


def encode_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: encode_binary(value) for key, value in row.items()}


# A result row as returned to clients; binary values go out as hex text.
RowData = Annotated[Dict[str, Any], PlainSerializer(encode_row)]


class ColumnDefinition(BaseModel):
    """Declarative description of one column of a table to create."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="Engine type name, e.g. INTEGER, JSONB, vector")
    is_nullable: bool = True
    is_primary_key: bool = False
    is_unique: bool = False
    has_default: bool = False
    default_value: Optional[str] = Field(
        default=None,
        description="Literal default, or the dimension count for vector columns",
    )
    is_foreign_key: bool = False
    reference_table: Optional[str] = None
    reference_column: Optional[str] = None
    on_delete: Optional[OnDeleteAction] = None


class CreateTableRequest(BaseModel):
    table_name: str = Field(..., alias="tableName")
    columns: List[ColumnDefinition] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class DeleteTableRequest(BaseModel):
    table_name: str = Field(..., alias="tableName")

    model_config = ConfigDict(populate_by_name=True)


class UpdateRowRequest(BaseModel):
    id: Optional[Union[StrictInt, StrictStr]] = None
    data: FieldMap = Field(default_factory=dict)


class TableColumn(BaseModel):
    name: str
    type: str


class TableInfo(BaseModel):
    """Catalog projection of an existing table."""

    table_name: str
    columns: List[TableColumn]


class ColumnMetadata(BaseModel):
    column_name: str
    data_type: str
    column_default: Optional[str] = None
    is_nullable: str


class TableListResponse(BaseModel):
    tables: List[TableInfo]


class TableDataResponse(BaseModel):
    data: List[RowData]
    columns: List[ColumnMetadata]


class RowResponse(BaseModel):
    data: RowData


class CreateTableResponse(BaseModel):
    message: str
    query: str


class MessageResponse(BaseModel):
    message: str

from typing import List

from pydantic import BaseModel, Field

from .tables import RowData


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, description="SQL text, or an English question for natural-query")


class QueryResultResponse(BaseModel):
    results: List[RowData]


class NaturalQueryResponse(BaseModel):
    sql: str

from fastapi import APIRouter, Depends

from dbplayground.interfaces.dependencies import get_query_service, get_translation_service
from dbplayground.schemas.query import NaturalQueryResponse, QueryRequest, QueryResultResponse
from dbplayground.schemas.tables import MessageResponse
from dbplayground.services.query_service import QueryService
from dbplayground.services.translation_service import TranslationService

router = APIRouter()


@router.post("/init", response_model=MessageResponse)
async def init_database(
    query_service: QueryService = Depends(get_query_service),
) -> MessageResponse:
    """Create the example users table and its updated_at trigger"""
    await query_service.initialize()
    return MessageResponse(message="Database initialized successfully")


@router.post("/query", response_model=QueryResultResponse)
async def run_query(
    request: QueryRequest,
    query_service: QueryService = Depends(get_query_service),
) -> QueryResultResponse:
    """Execute arbitrary SQL"""
    results = await query_service.execute(request.query)
    return QueryResultResponse(results=results)


@router.post("/natural-query", response_model=NaturalQueryResponse)
async def natural_query(
    request: QueryRequest,
    translation_service: TranslationService = Depends(get_translation_service),
) -> NaturalQueryResponse:
    """Translate an English question into a SQL statement"""
    sql = await translation_service.translate(request.query)
    return NaturalQueryResponse(sql=sql)

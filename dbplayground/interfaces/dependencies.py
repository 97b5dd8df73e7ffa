from fastapi import Depends, Request

from dbplayground.infrastructure.db.connection import DatabaseManager
from dbplayground.infrastructure.llm.openai_client import ChatCompletionClient
from dbplayground.services.query_service import QueryService
from dbplayground.services.row_service import RowService
from dbplayground.services.table_service import TableService
from dbplayground.services.translation_service import TranslationService


def get_database(request: Request) -> DatabaseManager:
    """Database manager created by the application lifespan."""
    return request.app.state.database


def get_chat_client(request: Request) -> ChatCompletionClient:
    return request.app.state.chat_client


def get_table_service(database: DatabaseManager = Depends(get_database)) -> TableService:
    return TableService(database)


def get_row_service(database: DatabaseManager = Depends(get_database)) -> RowService:
    return RowService(database)


def get_query_service(database: DatabaseManager = Depends(get_database)) -> QueryService:
    return QueryService(database)


def get_translation_service(
    client: ChatCompletionClient = Depends(get_chat_client),
) -> TranslationService:
    return TranslationService(client)

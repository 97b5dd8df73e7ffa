import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from dbplayground.core.config import Settings, get_settings
from dbplayground.core.exceptions import AppException, app_exception_handler
from dbplayground.core.logging import setup_logging
from dbplayground.infrastructure.db.connection import DatabaseManager
from dbplayground.infrastructure.llm.openai_client import ChatCompletionClient
from dbplayground.interfaces.http.middleware.logging import LoggingMiddleware
from dbplayground.interfaces.http.routes import db as db_routes
from dbplayground.interfaces.http.routes import tables as table_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    setup_logging()
    logger.info("Starting %s %s", settings.PROJECT_NAME, settings.VERSION)

    # The engine connects lazily; startup succeeds even if the database is down.
    app.state.database = DatabaseManager(settings.database)
    app.state.chat_client = ChatCompletionClient(settings.llm)

    try:
        yield
    finally:
        logger.info("Shutting down...")
        await app.state.database.disconnect()


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Browse, edit and define PostgreSQL tables over HTTP",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(LoggingMiddleware)

    if settings.cors_settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_settings.allowed_origins],
            allow_credentials=settings.cors_settings.allow_credentials,
            allow_methods=settings.cors_settings.allowed_methods,
            allow_headers=settings.cors_settings.allowed_headers,
        )

    app.add_exception_handler(AppException, app_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies are client errors."""
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request",
                "details": "; ".join(
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                    for error in exc.errors()
                ),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle general exceptions."""
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        content = {"error": "Internal server error"}
        if settings.DEBUG:
            content["details"] = traceback.format_exc()
        return JSONResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health/detailed")
    async def detailed_health_check(request: Request) -> dict:
        """Health check including database connectivity."""
        health_status = {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "checks": {},
        }

        if await request.app.state.database.health_check():
            health_status["checks"]["database"] = "healthy"
        else:
            health_status["checks"]["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        return health_status

    app.include_router(db_routes.router, prefix="/db", tags=["Database"])
    app.include_router(table_routes.router, prefix="/db/tables", tags=["Tables"])

    return app


app = create_application()


def main():
    settings = get_settings()
    uvicorn.run(
        "dbplayground.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info" if not settings.DEBUG else "debug",
        access_log=True,
        server_header=False,
    )


if __name__ == "__main__":
    main()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import get_settings
from app.core.database_init import init_database_schema
from app.core.db import dispose_engine, get_engine
from app.core.logging import configure_logging
from app.core.middleware import RequestLoggingMiddleware
from app.repositories import ProductRepository, RepositoryError
from app.routers import get_api_router

logger = logging.getLogger("app.errors")


async def reject_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    raw_body = (await request.body()).decode("utf-8", errors="replace")
    errors = jsonable_encoder(exc.errors())
    logger.warning("Rejected %s %s (%d errors) body=%s", request.method, request.url.path, len(errors), raw_body)
    return JSONResponse({"detail": errors, "body": raw_body}, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


async def report_store_failure(request: Request, exc: RepositoryError) -> PlainTextResponse:
    logger.error("Store failure during %s on %s %s", exc.operation, request.method, request.url.path)
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def report_unhandled_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database_schema(app.state.product_repository.engine)
    yield
    dispose_engine()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.product_repository = ProductRepository(get_engine())

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, reject_invalid_request)
    app.add_exception_handler(RepositoryError, report_store_failure)
    app.add_exception_handler(Exception, report_unhandled_error)

    app.include_router(get_api_router(), prefix=settings.API_PREFIX)
    return app


app = create_app()

from contextlib import asynccontextmanager

import structlog
import uvicorn
from backend_common.fastapi_app import create_service_app
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sentry_sdk import set_tag
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .dependencies import log_api_request
from .exceptions import ApiError
from .logging_config import configure_logging
from .routers.accounts import router as accounts_router
from .routers.body_metrics import router as body_metrics_router
from .routers.plans import router as plans_router
from .routers.workouts import router as workouts_router
from .store import DocumentStore, MongoDocumentStore

configure_logging()
set_tag("service", "fitness-service")
logger = structlog.get_logger(__name__)

API_PREFIX = "/api/auth"


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.detail}, headers=exc.headers)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("request_body_invalid", path=request.url.path, errors=exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": "Invalid request body", "error": _describe_validation_errors(exc)},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


def build_store(settings: Settings) -> MongoDocumentStore:
    return MongoDocumentStore(
        settings.mongodb_uri,
        settings.database_name,
        retry_delay_seconds=settings.db_retry_delay_seconds,
        server_selection_timeout_ms=settings.db_server_selection_timeout_ms,
    )


def _mount_static(app: FastAPI, settings: Settings) -> None:
    index_path = settings.static_dir / settings.index_document

    @app.get("/", include_in_schema=False)
    async def index():
        if not index_path.is_file():
            raise StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
        return FileResponse(index_path)

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")
    else:
        logger.warning("static_dir_missing", static_dir=str(settings.static_dir))


def create_app(settings: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    store = store if store is not None else build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.start()
        logger.info(
            "server_started",
            host=settings.host,
            port=settings.port,
            environment=settings.app_env,
            database=settings.redacted_mongodb_uri,
        )
        try:
            yield
        finally:
            await store.close()
            logger.info("server_stopped")

    app = create_service_app(
        title="fitness-service",
        version="0.1.0",
        description="Accounts, workouts, body metrics and trainer plans",
        enable_metrics=settings.enable_metrics,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    api_dependencies = [Depends(log_api_request)]
    app.include_router(accounts_router, prefix=API_PREFIX, dependencies=api_dependencies)
    app.include_router(workouts_router, prefix=API_PREFIX, dependencies=api_dependencies)
    app.include_router(body_metrics_router, prefix=API_PREFIX, dependencies=api_dependencies)
    app.include_router(plans_router, prefix=API_PREFIX, dependencies=api_dependencies)

    # Registered last: the static mount catches every path not matched above.
    _mount_static(app, settings)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

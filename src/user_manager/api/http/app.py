"""FastAPI application setup for the User Manager service."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from user_manager import __version__
from user_manager.api.http.app_data import ApplicationDependencies
from user_manager.api.http.error_handlers import register_error_handlers
from user_manager.api.http.routers.health import router as health_router
from user_manager.api.http.routers.users import router as users_router
from user_manager.api.utils.app_startup import configure_logging
from user_manager.core.errors import INTERNAL_ERROR_MESSAGE
from user_manager.core.services import DbSessionService
from user_manager.runtime.config.config_data import AppConfig
from user_manager.runtime.context import get_config

REQUEST_ID_HEADER = "X-Request-ID"

main_config = get_config()

configure_logging()


def _check_cors(app_config: AppConfig) -> None:
    cors = app_config.cors
    if app_config.environment == "production" and "*" in cors.origins and cors.allow_credentials:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup()
    try:
        yield
    finally:
        shutdown()


docs_enabled = main_config.app.docs_enabled

app = FastAPI(
    title="User Manager",
    description="CRUD service for user records",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if docs_enabled else None,
    redoc_url="/redoc" if docs_enabled else None,
    openapi_url="/openapi.json" if docs_enabled else None,
)

_check_cors(main_config.app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=main_config.app.cors.origins,
    allow_credentials=main_config.app.cors.allow_credentials,
    allow_methods=main_config.app.cors.allow_methods,
    allow_headers=main_config.app.cors.allow_headers,
)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag every log line of a request with its id and log start and end."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    started = time.perf_counter()

    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=_client_ip(request),
    ):
        logger.info("request.start")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.bind(
                status_code=500,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": INTERNAL_ERROR_MESSAGE},
                headers={REQUEST_ID_HEADER: request_id},
            )

        logger.bind(
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        ).info("request.end")
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response


register_error_handlers(app)

app.include_router(health_router)
app.include_router(users_router)


def startup() -> None:
    """Open the configured database and publish the application dependencies."""
    config = get_config()
    logger.info(
        "Starting User Manager {} in {} environment", __version__, config.app.environment
    )

    database_service = DbSessionService(config.database)
    if config.database.create_tables:
        database_service.create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()
    logger.info("Server exited gracefully")

"""Global exception handlers.

- UserManagerError → its own status with a client-safe message
- RequestValidationError (bad path parameter or body) → 400

Anything else is caught by the request logging middleware and answered with
a generic 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from user_manager.core.errors import UserManagerError


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(UserManagerError)
    async def user_manager_error_handler(request: Request, exc: UserManagerError):
        log = logger.bind(path=request.url.path, error_type=type(exc).__name__)
        if exc.http_status >= 500:
            log.opt(exception=exc).error("Service error: {}", exc.message)
        else:
            log.info("Client error: {}", exc.message)
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.public_message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.bind(path=request.url.path).info("Bad request: {}", errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Bad Request", "errors": errors},
        )

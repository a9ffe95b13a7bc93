"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from user_manager.api.http.app_data import ApplicationDependencies
from user_manager.api.http.deps import get_app_dependencies
from user_manager.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; returns 200 as long as the process is running."""
    return {"status": "healthy", "service": "user-manager"}


@router.get("/ready", response_model=None)
def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe; 503 when the database is unreachable."""
    database_service = app_deps.database_service
    db_healthy = database_service.health_check()

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": get_config().app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": database_service.backend,
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response

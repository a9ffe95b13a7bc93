"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from user_manager.api.http.app_data import ApplicationDependencies
from user_manager.core.services import UserGateway, UserService
from user_manager.entities.core.user import UserRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependencies created at startup."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session that is closed once the response is sent."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_gateway(db: Session = Depends(get_db_session)) -> UserGateway:
    """Get the persistence gateway for users."""
    return UserRepository(db)


def get_user_service(
    gateway: UserGateway = Depends(get_user_gateway),
) -> UserService:
    """Get the User service instance."""
    return UserService(gateway)

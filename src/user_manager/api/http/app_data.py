from dataclasses import dataclass

from user_manager.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService

from typing import Protocol

from user_manager.core.models.user import UserParams
from user_manager.entities.core.user.entity import User


class UserGateway(Protocol):
    """CRUD operations the user service needs from the data store.

    Implementations raise :class:`user_manager.core.errors.PersistenceError`
    when the store fails or refuses an operation.
    """

    def list_users(self) -> list[User]: ...

    def get_user(self, user_id: int) -> User | None: ...

    def create_user(self, params: UserParams) -> User: ...

    def update_user(self, user_id: int, params: UserParams) -> int:
        """Apply ``params`` to the user and return the number of rows affected."""
        ...

    def delete_user(self, user_id: int) -> bool: ...

"""Unit tests for the user create/update flows and service facade."""

from unittest.mock import Mock

import pytest

from user_manager.core.errors import PersistenceError, UserNotFoundError
from user_manager.core.models.user import UserInput, UserParams
from user_manager.core.services.user import (
    Created,
    Failed,
    NotFound,
    Rejected,
    Updated,
    UserService,
    create_user,
    update_user,
)
from user_manager.entities.core.user import User, UserStatus


@pytest.fixture
def stored_user() -> User:
    return User(
        id=1,
        first_name="Jay",
        last_name="Vas",
        email="jay@gmail.com",
        phone="+0722134567",
        age=30,
        status=UserStatus.ACTIVE,
    )


@pytest.fixture
def gateway(stored_user: User) -> Mock:
    gateway = Mock()
    gateway.create_user.return_value = stored_user
    gateway.update_user.return_value = 1
    gateway.get_user.return_value = stored_user
    gateway.list_users.return_value = [stored_user]
    gateway.delete_user.return_value = True
    return gateway


class TestCreateUser:
    def test_created_with_gateway_assigned_id(self, user_input: UserInput, gateway: Mock):
        outcome = create_user(user_input, gateway)

        assert isinstance(outcome, Created)
        assert outcome.record.id == 1
        gateway.create_user.assert_called_once_with(
            UserParams(
                first_name="Jay",
                last_name="Vas",
                email="jay@gmail.com",
                phone="+0722134567",
                age=30,
                status="active",
            )
        )

    def test_rejected_without_touching_gateway(self, gateway: Mock):
        user_input = UserInput(
            first_name="abc",
            last_name="anhgd",
            email="jay@gmail.com",
            phone="722134567",
            age=30,
            status="active",
        )

        outcome = create_user(user_input, gateway)

        assert isinstance(outcome, Rejected)
        assert outcome.message == "Phone must be a valid phone number"
        gateway.create_user.assert_not_called()

    def test_persistence_error_is_failed(self, user_input: UserInput, gateway: Mock):
        gateway.create_user.side_effect = PersistenceError("duplicate key on users_pkey")

        outcome = create_user(user_input, gateway)

        assert outcome == Failed()
        assert outcome.error == "Internal Server Error"
        assert "duplicate" not in outcome.error

    def test_unexpected_error_is_failed(self, user_input: UserInput, gateway: Mock):
        gateway.create_user.side_effect = RuntimeError("connection reset")

        assert isinstance(create_user(user_input, gateway), Failed)


class TestUpdateUser:
    def test_updated(self, user_input: UserInput, gateway: Mock):
        outcome = update_user(1, user_input, gateway)

        assert outcome == Updated(1)
        gateway.update_user.assert_called_once()
        assert gateway.update_user.call_args.args[0] == 1

    def test_rejected_on_invalid_age(self, gateway: Mock):
        user_input = UserInput(
            first_name="abc",
            last_name="abdsd",
            email="jay@gmail.com",
            phone="+0722134567",
            age=-30,
            status="active",
        )

        outcome = update_user(2, user_input, gateway)

        assert isinstance(outcome, Rejected)
        assert outcome.message == "Age must be positive value"
        gateway.update_user.assert_not_called()

    def test_zero_rows_is_not_found(self, user_input: UserInput, gateway: Mock):
        gateway.update_user.return_value = 0

        assert update_user(42, user_input, gateway) == NotFound(42)

    def test_persistence_error_is_failed(self, user_input: UserInput, gateway: Mock):
        gateway.update_user.side_effect = PersistenceError("invalid enum value")

        assert update_user(1, user_input, gateway) == Failed()


class TestUserService:
    def test_list_users(self, gateway: Mock, stored_user: User):
        assert UserService(gateway).list_users() == [stored_user]

    def test_get_user(self, gateway: Mock, stored_user: User):
        assert UserService(gateway).get_user(1) == stored_user
        gateway.get_user.assert_called_once_with(1)

    def test_get_missing_user_raises(self, gateway: Mock):
        gateway.get_user.return_value = None

        with pytest.raises(UserNotFoundError) as exc_info:
            UserService(gateway).get_user(7)

        assert exc_info.value.http_status == 404
        assert exc_info.value.user_id == 7

    def test_delete_user(self, gateway: Mock):
        UserService(gateway).delete_user(1)
        gateway.delete_user.assert_called_once_with(1)

    def test_delete_missing_user_raises(self, gateway: Mock):
        gateway.delete_user.return_value = False

        with pytest.raises(UserNotFoundError):
            UserService(gateway).delete_user(7)

    def test_list_propagates_persistence_error(self, gateway: Mock):
        gateway.list_users.side_effect = PersistenceError("boom")

        with pytest.raises(PersistenceError):
            UserService(gateway).list_users()

    def test_create_and_update_delegate(self, gateway: Mock, user_input: UserInput):
        service = UserService(gateway)

        assert isinstance(service.create_user(user_input), Created)
        assert service.update_user(1, user_input) == Updated(1)

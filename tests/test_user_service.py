"""
Tests for the UserService.

The repository port is mocked; each test verifies delegation and that
repository errors reach the caller unchanged.
"""

from unittest.mock import MagicMock

import pytest

from usersapi.application.users.user_service import UserService
from usersapi.domain.users.entities import User
from usersapi.domain.users.errors import StorageError, UserNotFoundError
from usersapi.domain.users.ports import UserRepository


@pytest.fixture
def repository() -> MagicMock:
    return MagicMock(spec=UserRepository)


@pytest.fixture
def service(repository: MagicMock) -> UserService:
    return UserService(repository)


class TestCreateUser:
    """Tests for UserService.create_user."""

    def test_delegates_to_repository(self, service: UserService, repository: MagicMock) -> None:
        user = User(name="John Doe", email="john@example.com")
        repository.create.return_value = User(id=1, name="John Doe", email="john@example.com")

        created = service.create_user(user)

        repository.create.assert_called_once_with(user)
        assert created.id == 1

    def test_storage_error_propagates_unchanged(
        self, service: UserService, repository: MagicMock
    ) -> None:
        error = StorageError("duplicate key value violates unique constraint")
        repository.create.side_effect = error

        with pytest.raises(StorageError) as excinfo:
            service.create_user(User(name="John", email="john@example.com"))

        assert excinfo.value is error


class TestGetUserById:
    """Tests for UserService.get_user_by_id."""

    def test_delegates_to_repository(self, service: UserService, repository: MagicMock) -> None:
        repository.find_by_id.return_value = User(id=7, name="Ada", email="ada@example.com")

        assert service.get_user_by_id(7).name == "Ada"
        repository.find_by_id.assert_called_once_with(7)

    def test_not_found_propagates_unchanged(
        self, service: UserService, repository: MagicMock
    ) -> None:
        error = UserNotFoundError(7)
        repository.find_by_id.side_effect = error

        with pytest.raises(UserNotFoundError) as excinfo:
            service.get_user_by_id(7)

        assert excinfo.value is error


class TestGetAllUsers:
    """Tests for UserService.get_all_users."""

    def test_returns_repository_order(self, service: UserService, repository: MagicMock) -> None:
        users = [
            User(id=1, name="A", email="a@example.com"),
            User(id=2, name="B", email="b@example.com"),
        ]
        repository.find_all.return_value = users

        assert service.get_all_users() == users

    def test_empty_store_returns_empty_list(
        self, service: UserService, repository: MagicMock
    ) -> None:
        repository.find_all.return_value = []
        assert service.get_all_users() == []

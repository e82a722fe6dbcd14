import pytest
from datetime import datetime
from unittest.mock import MagicMock

from users_service.application.dto import Page, UserDTO
from users_service.application.exceptions import DuplicateResourceError, ResourceNotFoundError
from users_service.application.user_service import UserService
from users_service.domain.entities import User


@pytest.fixture
def repo():
    return MagicMock()

@pytest.fixture
def service(repo):
    return UserService(repo=repo)

@pytest.fixture
def stored_user():
    return User(
        id=1,
        first_name="John",
        last_name="Doe",
        email="john@example.com",
        phone="9876543210",
        address="123 Main St",
        created_at=datetime(2025, 1, 1, 12, 0, 0),
        updated_at=datetime(2025, 1, 1, 12, 0, 0),
    )

@pytest.fixture
def dto():
    return UserDTO(
        id=None,
        first_name="John",
        last_name="Doe",
        email="john@example.com",
        phone="9876543210",
        address="123 Main St",
    )

def test_create_user_success(service, repo, dto, stored_user):
    """Создание пользователя со свободным email"""
    repo.exists_by_email.return_value = False
    repo.save.return_value = stored_user

    result = service.create_user(dto)

    assert result.id == 1
    assert result.email == "john@example.com"
    repo.save.assert_called_once()
    saved = repo.save.call_args.args[0]
    # новая сущность уходит в репозиторий без id и без временных меток
    assert saved.id is None
    assert saved.created_at is None
    assert saved.updated_at is None
    assert saved.first_name == "John"

def test_create_user_duplicate(service, repo, dto):
    """Повторный email при создании"""
    repo.exists_by_email.return_value = True

    with pytest.raises(DuplicateResourceError):
        service.create_user(dto)
    repo.save.assert_not_called()

def test_dto_has_no_timestamps(service, repo, stored_user):
    repo.find_by_id.return_value = stored_user

    result = service.get_user_by_id(1)

    assert not hasattr(result, "created_at")
    assert not hasattr(result, "updated_at")
    assert result.address == "123 Main St"

def test_get_user_by_id_not_found(service, repo):
    repo.find_by_id.return_value = None

    with pytest.raises(ResourceNotFoundError):
        service.get_user_by_id(1)

def test_get_user_by_email(service, repo, stored_user):
    repo.find_by_email.return_value = stored_user

    assert service.get_user_by_email("john@example.com").id == 1
    repo.find_by_email.assert_called_once_with("john@example.com")

def test_get_user_by_email_not_found(service, repo):
    repo.find_by_email.return_value = None

    with pytest.raises(ResourceNotFoundError):
        service.get_user_by_email("nobody@example.com")

def test_get_all_users(service, repo, stored_user):
    repo.find_all.return_value = [stored_user]

    result = service.get_all_users()

    assert [u.id for u in result] == [1]

def test_get_all_users_paged(service, repo, stored_user):
    repo.find_all_paged.return_value = Page(items=[stored_user], page=2, size=1, total=3)

    result = service.get_all_users_paged(2, 1)

    repo.find_all_paged.assert_called_once_with(2, 1)
    assert isinstance(result.items[0], UserDTO)
    assert result.total == 3
    assert result.total_pages == 3
    assert result.is_last

def test_update_user_not_found(service, repo, dto):
    repo.find_by_id.return_value = None

    with pytest.raises(ResourceNotFoundError):
        service.update_user(1, dto)
    repo.save.assert_not_called()

def test_update_user_same_email_skips_duplicate_check(service, repo, dto, stored_user):
    """Свой email не считается дубликатом"""
    repo.find_by_id.return_value = stored_user
    repo.save.side_effect = lambda u: u
    dto.address = "456 Oak Ave"

    result = service.update_user(1, dto)

    repo.exists_by_email.assert_not_called()
    assert result.address == "456 Oak Ave"

def test_update_user_email_taken(service, repo, dto, stored_user):
    repo.find_by_id.return_value = stored_user
    repo.exists_by_email.return_value = True
    dto.email = "jane@example.com"

    with pytest.raises(DuplicateResourceError):
        service.update_user(1, dto)
    repo.save.assert_not_called()

def test_update_user_overwrites_fields_in_place(service, repo, stored_user):
    repo.find_by_id.return_value = stored_user
    repo.exists_by_email.return_value = False
    repo.save.side_effect = lambda u: u
    created_at = stored_user.created_at

    new = UserDTO(id=99, first_name="Jane", last_name="Roe", email="jane@example.com",
                  phone="123", address=None)
    result = service.update_user(1, new)

    saved = repo.save.call_args.args[0]
    assert saved is stored_user
    assert saved.id == 1
    assert saved.created_at == created_at
    assert result.id == 1
    assert result.first_name == "Jane"
    assert result.email == "jane@example.com"
    assert result.address is None

def test_delete_user_success(service, repo):
    repo.exists_by_id.return_value = True

    service.delete_user_by_id(1)

    repo.delete_by_id.assert_called_once_with(1)

def test_delete_user_not_found(service, repo):
    repo.exists_by_id.return_value = False

    with pytest.raises(ResourceNotFoundError):
        service.delete_user_by_id(1)
    repo.delete_by_id.assert_not_called()

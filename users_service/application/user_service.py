import structlog

from ..domain.entities import User
from .dto import Page, UserDTO
from .exceptions import DuplicateResourceError, ResourceNotFoundError

logger = structlog.get_logger()


class IUserRepository:
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def exists_by_email(self, email: str) -> bool: ...
    def exists_by_id(self, user_id: int) -> bool: ...
    def find_all(self) -> list[User]: ...
    def find_all_paged(self, page: int, size: int) -> Page[User]: ...
    def save(self, user: User) -> User: ...
    def delete_by_id(self, user_id: int) -> None: ...


def to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone,
        address=user.address,
    )


class UserService:
    """Сценарии работы с пользователями поверх репозитория.

    Проверяет уникальность email до записи; окончательную гарантию даёт
    уникальный индекс в БД, его нарушение репозиторий поднимает как
    DuplicateResourceError.
    """

    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def create_user(self, dto: UserDTO) -> UserDTO:
        logger.info("user_create", email=dto.email)
        if self.repo.exists_by_email(dto.email):
            raise DuplicateResourceError(f"User with email {dto.email} already exists")

        user = User(
            id=None,
            first_name=dto.first_name,
            last_name=dto.last_name,
            email=dto.email,
            phone=dto.phone,
            address=dto.address,
        )
        saved = self.repo.save(user)
        logger.info("user_created", user_id=saved.id)
        return to_dto(saved)

    def get_user_by_id(self, user_id: int) -> UserDTO:
        logger.info("user_fetch", user_id=user_id)
        user = self.repo.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError(f"User not found with ID: {user_id}")
        return to_dto(user)

    def get_all_users(self) -> list[UserDTO]:
        logger.info("user_fetch_all")
        return [to_dto(u) for u in self.repo.find_all()]

    def get_all_users_paged(self, page: int, size: int) -> Page[UserDTO]:
        logger.info("user_fetch_page", page=page, size=size)
        return self.repo.find_all_paged(page, size).map(to_dto)

    def update_user(self, user_id: int, dto: UserDTO) -> UserDTO:
        logger.info("user_update", user_id=user_id)
        user = self.repo.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError(f"User not found with ID: {user_id}")

        # свой собственный email не считается дубликатом
        if user.email != dto.email and self.repo.exists_by_email(dto.email):
            raise DuplicateResourceError(f"User with email {dto.email} already exists")

        user.first_name = dto.first_name
        user.last_name = dto.last_name
        user.email = dto.email
        user.phone = dto.phone
        user.address = dto.address

        updated = self.repo.save(user)
        logger.info("user_updated", user_id=user_id)
        return to_dto(updated)

    def delete_user_by_id(self, user_id: int) -> None:
        logger.info("user_delete", user_id=user_id)
        if not self.repo.exists_by_id(user_id):
            raise ResourceNotFoundError(f"User not found with ID: {user_id}")
        self.repo.delete_by_id(user_id)
        logger.info("user_deleted", user_id=user_id)

    def get_user_by_email(self, email: str) -> UserDTO:
        logger.info("user_fetch_by_email", email=email)
        user = self.repo.find_by_email(email)
        if user is None:
            raise ResourceNotFoundError(f"User not found with email: {email}")
        return to_dto(user)

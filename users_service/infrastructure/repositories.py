from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import UserORM
from .metrics import db_queries_total
from ..domain.entities import User
from ..application.dto import Page
from ..application.exceptions import DuplicateResourceError, ResourceNotFoundError
from ..application.user_service import IUserRepository

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def to_domain(u: UserORM) -> User:
    return User(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        phone=u.phone,
        address=u.address,
        created_at=u.created_at,
        updated_at=u.updated_at,
    )

class UserRepository(IUserRepository):
    def __init__(self, db: Session, clock: Callable[[], datetime] | None = None):
        self.db = db
        self.clock = clock or utcnow

    def find_by_id(self, user_id: int) -> User | None:
        db_queries_total.inc()
        row = self.db.get(UserORM, user_id)
        return to_domain(row) if row else None

    def find_by_email(self, email: str) -> User | None:
        db_queries_total.inc()
        row = self.db.query(UserORM).filter(UserORM.email == email).first()
        return to_domain(row) if row else None

    def exists_by_email(self, email: str) -> bool:
        db_queries_total.inc()
        return self.db.query(UserORM.id).filter(UserORM.email == email).first() is not None

    def exists_by_id(self, user_id: int) -> bool:
        db_queries_total.inc()
        return self.db.query(UserORM.id).filter(UserORM.id == user_id).first() is not None

    def find_all(self) -> list[User]:
        db_queries_total.inc()
        return [to_domain(r) for r in self.db.query(UserORM).all()]

    def find_all_paged(self, page: int, size: int) -> Page[User]:
        db_queries_total.inc()
        total = self.db.scalar(select(func.count()).select_from(UserORM)) or 0
        rows = self.db.scalars(
            select(UserORM).order_by(UserORM.id).limit(size).offset(page * size)
        ).all()
        return Page(items=[to_domain(r) for r in rows], page=page, size=size, total=total)

    def save(self, user: User) -> User:
        db_queries_total.inc()
        now = self.clock()
        if user.id is None:
            row = UserORM(created_at=now)
            self.db.add(row)
        else:
            row = self.db.get(UserORM, user.id)
            if row is None:
                raise ResourceNotFoundError(f"User not found with ID: {user.id}")
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.email = user.email
        row.phone = user.phone
        row.address = user.address
        row.updated_at = now
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # уникальный индекс по email: проигравший в гонке create/update
            if "email" in str(e.orig).lower():
                raise DuplicateResourceError(f"User with email {user.email} already exists") from e
            raise
        self.db.refresh(row)
        return to_domain(row)

    def delete_by_id(self, user_id: int) -> None:
        db_queries_total.inc()
        self.db.query(UserORM).filter(UserORM.id == user_id).delete()
        self.db.commit()

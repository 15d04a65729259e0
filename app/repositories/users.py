# app/repositories/users.py

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import AppError, ErrorKind, conflict, is_unique_violation
from app.models.users import Role, User

DEFAULT_ROLE = "end_user"


@dataclass
class UserRecord:
    id: str
    role: str | None
    name: str
    email: str
    password_hash: str


class UserRepository:
    def __init__(self, db: Session, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or logging.getLogger("app.repositories.users")

    def _select_user(self):
        return select(
            User.id,
            Role.name.label("role"),
            User.name,
            User.email,
            User.password_hash,
        ).outerjoin(Role, User.role_id == Role.id)

    def register(self, email: str, name: str, password_hash: str) -> str:
        role_id = self.db.scalar(select(Role.id).where(Role.name == DEFAULT_ROLE))

        if role_id is None:
            self.logger.error(f"repo::register - Role '{DEFAULT_ROLE}' is missing")
            raise AppError(ErrorKind.INTERNAL, "Unable to create account")

        user = User(
            role_id=role_id,
            email=email,
            name=name,
            password_hash=password_hash,
        )

        try:
            self.db.add(user)
            self.db.flush()

        except IntegrityError as exc:
            if is_unique_violation(exc):
                self.logger.warning(f"repo::register - Email already registered ({email})")
                raise conflict("Email already registered") from exc

            self.logger.error(f"repo::register - Failed to insert user ({email})")
            raise

        return user.id

    def find_by_email(self, email: str) -> UserRecord | None:
        try:
            row = self.db.execute(
                self._select_user().where(User.email == email)
            ).first()
        except SQLAlchemyError:
            self.logger.exception(f"repo::find_by_email - Failed to get user ({email})")
            raise

        if row is None:
            self.logger.warning(f"repo::find_by_email - User not found ({email})")
            return None

        return UserRecord(**row._mapping)

    def find_by_id(self, user_id: str) -> UserRecord | None:
        try:
            row = self.db.execute(
                self._select_user().where(User.id == user_id)
            ).first()
        except SQLAlchemyError:
            self.logger.exception(f"repo::find_by_id - Failed to get user ({user_id})")
            raise

        if row is None:
            self.logger.warning(f"repo::find_by_id - User not found ({user_id})")
            return None

        return UserRecord(**row._mapping)

"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from usergate.domain.shared import ConflictError, PersistenceError, utc_now
from usergate.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserRepository,
    parse_user_id,
)
from usergate.infrastructure.persistence.sqlalchemy.models.user import UserModel

logger = logging.getLogger(__name__)


def _violated_constraint(error: IntegrityError) -> str:
    """Name the violated constraint or column, lower-cased.

    asyncpg exposes ``constraint_name`` on the driver error. Otherwise only
    the first line of the message is used: PostgreSQL repeats the
    duplicate value on its DETAIL line, SQLite names ``table.column``.
    """
    cause = getattr(error.orig, "__cause__", None)
    name = getattr(cause, "constraint_name", None) or getattr(
        error.orig,
        "constraint_name",
        None,
    )
    if name:
        return name.lower()
    lines = str(error.orig).splitlines()
    return lines[0].lower() if lines else ""


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Every method opens its own session from ``session_maker`` and runs in a
    single transaction, so the pooled connection is returned as soon as
    the method exits, whether it succeeds or raises.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def find_by_username(self, username: str) -> Optional[User]:
        username = (username or "").strip()
        if not username:
            return None

        stmt = select(UserModel).where(UserModel.username == username)
        try:
            async with self._session_maker() as session, session.begin():
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
                return self._map_to_domain(model) if model is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError("find_by_username", e) from e

    async def find_by_id(self, user_id: int) -> Optional[User]:
        user_id = parse_user_id(user_id)

        stmt = select(UserModel).where(UserModel.id == user_id)
        try:
            async with self._session_maker() as session, session.begin():
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
                return self._map_to_domain(model) if model is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError("find_by_id", e) from e

    async def insert(
        self,
        username: str,
        email: str,
        password_credential: str,
        dob: date | None = None,
        phone: str | None = None,
        role: str | None = None,
    ) -> int:
        model = UserModel(
            username=username,
            email=Email(email).value,
            password_credential=password_credential,
            dob=dob,
            phone=phone,
        )
        if role:
            model.role = role

        try:
            async with self._session_maker() as session, session.begin():
                session.add(model)
                await session.flush()
                user_id = model.id
        except IntegrityError as e:
            raise self._conflict_for(e, username, email) from e
        except SQLAlchemyError as e:
            raise PersistenceError("insert", e) from e

        logger.info("Created user: %s (id: %s)", username, user_id)
        return user_id

    async def update_credential(self, user_id: int, password_credential: str) -> int:
        user_id = parse_user_id(user_id)
        return await self._write_credential(
            "update_credential",
            password_credential,
            UserModel.id == user_id,
        )

    async def update_credential_if_unchanged(
        self,
        user_id: int,
        expected_credential: str,
        password_credential: str,
    ) -> int:
        user_id = parse_user_id(user_id)
        return await self._write_credential(
            "update_credential_if_unchanged",
            password_credential,
            UserModel.id == user_id,
            UserModel.password_credential == expected_credential,
        )

    async def _write_credential(
        self,
        operation: str,
        password_credential: str,
        *conditions: ColumnElement[bool],
    ) -> int:
        stmt = (
            update(UserModel)
            .where(*conditions)
            .values(
                {
                    UserModel.password_credential: password_credential,
                    UserModel.updated_at: utc_now(),
                },
            )
        )
        try:
            async with self._session_maker() as session, session.begin():
                result = await session.execute(stmt)
                return result.rowcount or 0
        except SQLAlchemyError as e:
            raise PersistenceError(operation, e) from e

    async def list_credentials(self) -> list[tuple[int, str]]:
        stmt = select(UserModel.id, UserModel.password_credential).order_by(
            UserModel.id,
        )
        try:
            async with self._session_maker() as session, session.begin():
                result = await session.execute(stmt)
                return [(user_id, credential) for user_id, credential in result]
        except SQLAlchemyError as e:
            raise PersistenceError("list_credentials", e) from e

    @staticmethod
    def _conflict_for(
        error: IntegrityError,
        username: str,
        email: str,
    ) -> ConflictError:
        constraint = _violated_constraint(error)
        if "username" in constraint:
            return UsernameAlreadyExistsError(username)
        if "email" in constraint:
            return EmailAlreadyExistsError(email)
        return ConflictError("User already exists")

    @staticmethod
    def _map_to_domain(model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            email=model.email,
            password_credential=model.password_credential,
            status=model.status,
            dob=model.dob,
            phone=model.phone,
            role=model.role,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

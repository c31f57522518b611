"""SQLAlchemy model for the users table."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from usergate.domain.user import (
    DEFAULT_ROLE,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_ROLE_LENGTH,
)
from usergate.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class UserModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting users.

    The ``password`` column keeps its historical name and may hold either a
    bcrypt hash or a legacy plaintext value.

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    password_credential: Mapped[str] = mapped_column(
        "password",
        String(255),
        nullable=False,
    )

    # Descriptive fields, never used for access decisions except status
    status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(
        String(MAX_PHONE_LENGTH),
        nullable=True,
    )
    role: Mapped[str] = mapped_column(String(MAX_ROLE_LENGTH), default=DEFAULT_ROLE)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"

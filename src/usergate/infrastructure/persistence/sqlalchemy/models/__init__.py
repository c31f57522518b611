"""SQLAlchemy models. Importing this package registers every table on Base."""

from usergate.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from usergate.infrastructure.persistence.sqlalchemy.models.user import UserModel

__all__ = ["Base", "TimestampMixin", "UserModel"]

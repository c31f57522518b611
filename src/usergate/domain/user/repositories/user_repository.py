"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from usergate.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for user records.

    Every method is a single-row operation that commits on its own.
    """

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by exact username (surrounding whitespace ignored)."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by id.

        Raises
        ------
        ValidationError
            If ``user_id`` is not a positive integer
        """

    @abstractmethod
    async def insert(
        self,
        username: str,
        email: str,
        password_credential: str,
        dob: date | None = None,
        phone: str | None = None,
        role: str | None = None,
    ) -> int:
        """Insert a new user and return its id.

        Raises
        ------
        UsernameAlreadyExistsError, EmailAlreadyExistsError
            On a uniqueness violation
        """

    @abstractmethod
    async def update_credential(self, user_id: int, password_credential: str) -> int:
        """Replace the stored credential; returns the number of rows changed."""

    @abstractmethod
    async def update_credential_if_unchanged(
        self,
        user_id: int,
        expected_credential: str,
        password_credential: str,
    ) -> int:
        """Compare-and-set variant of ``update_credential``.

        Only writes while the stored value still equals
        ``expected_credential``. Returns the number of rows changed; 0 if the
        user is gone or the credential was replaced in the meantime.
        """

    @abstractmethod
    async def list_credentials(self) -> list[tuple[int, str]]:
        """Return ``(id, stored credential)`` for every user."""

"""User aggregate."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from usergate.domain.shared.time import utc_now
from usergate.domain.user.value_objects import Email, StatusValue, is_active_status

DEFAULT_ROLE = "user"

# Column sizes of the users table
MAX_NAME_LENGTH = 255
MAX_PHONE_LENGTH = 32
MAX_ROLE_LENGTH = 20


@dataclass(frozen=True)
class UserProfile:
    """Client-facing view of a user. Never carries the password credential."""

    id: int
    username: str
    email: str
    status: StatusValue = None
    dob: date | None = None
    phone: str | None = None
    role: str = DEFAULT_ROLE


class User:
    """
    User aggregate root.

    Holds identity, contact data and the stored password credential. The
    credential is either a bcrypt hash or a legacy plaintext value; it is
    only ever read by the authentication flow.
    """

    def __init__(
        self,
        username: str,
        email: Union[str, Email],
        password_credential: str,
        id: int | None = None,
        status: StatusValue = None,
        dob: date | None = None,
        phone: str | None = None,
        role: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._username = username
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_credential = password_credential
        self._status = status
        self._dob = dob
        self._phone = phone
        self._role = role or DEFAULT_ROLE
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_credential(self) -> str:
        return self._password_credential

    @property
    def status(self) -> StatusValue:
        return self._status

    @property
    def is_active(self) -> bool:
        return is_active_status(self._status)

    @property
    def dob(self) -> date | None:
        return self._dob

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def role(self) -> str:
        return self._role

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def profile(self) -> UserProfile:
        """Return the safe view of this user."""
        if self._id is None:
            msg = "User has not been persisted yet"
            raise ValueError(msg)
        return UserProfile(
            id=self._id,
            username=self._username,
            email=self.email,
            status=self._status,
            dob=self._dob,
            phone=self._phone,
            role=self._role,
        )

    @classmethod
    def reconstitute(
        cls,
        id: int,
        username: str,
        email: str,
        password_credential: str,
        status: StatusValue,
        dob: date | None,
        phone: str | None,
        role: str | None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "User":
        return cls(
            id=id,
            username=username,
            email=email,
            password_credential=password_credential,
            status=status,
            dob=dob,
            phone=phone,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id is not None and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._id, self._username))

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r})"

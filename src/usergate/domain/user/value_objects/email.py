"""Email value object.

Provides validated, normalized email addresses.
"""

import re
from dataclasses import dataclass

from usergate.domain.user.exceptions import InvalidEmailError

# user@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Email:
    """Value object representing a validated, lower-cased email address."""

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            msg = "Email is required"
            raise InvalidEmailError(msg)

        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"

from usergate.domain.user.value_objects.account_status import (
    ACTIVE_STRING_VALUES,
    StatusValue,
    is_active_status,
)
from usergate.domain.user.value_objects.email import Email
from usergate.domain.user.value_objects.user_id import parse_user_id

__all__ = [
    "ACTIVE_STRING_VALUES",
    "Email",
    "StatusValue",
    "is_active_status",
    "parse_user_id",
]

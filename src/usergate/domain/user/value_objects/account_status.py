"""Account status interpretation.

The status column predates this service and holds several spellings of
"active". A missing status means the account is not gated at all.
"""

from typing import Union

StatusValue = Union[int, str, None]

ACTIVE_STRING_VALUES = frozenset({"1", "active"})


def is_active_status(status: StatusValue) -> bool:
    """Return True if ``status`` permits login.

    Active values are ``1``, ``"1"`` and ``"active"`` in any letter case.
    ``None`` and blank strings count as "no status" and also permit login.
    """
    if status is None:
        return True
    if isinstance(status, bool):
        return status
    if isinstance(status, int):
        return status == 1
    if isinstance(status, str):
        normalized = status.strip().lower()
        return not normalized or normalized in ACTIVE_STRING_VALUES
    return False

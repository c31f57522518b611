"""User id parsing."""

from usergate.domain.shared.exceptions import ErrorCode, ValidationError


def parse_user_id(value: int | str | None) -> int:
    """Return ``value`` as a positive integer id.

    Accepts ints and decimal strings such as ``"42"``.

    Raises
    ------
    ValidationError
        If the value is missing, non-numeric or not positive
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError("Invalid user ID", code=ErrorCode.INVALID_USER_ID)

    if isinstance(value, int):
        user_id = value
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("Invalid user ID", code=ErrorCode.INVALID_USER_ID)
        user_id = int(text)

    if user_id <= 0:
        raise ValidationError("Invalid user ID", code=ErrorCode.INVALID_USER_ID)
    return user_id

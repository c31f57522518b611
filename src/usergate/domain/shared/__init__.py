from usergate.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PersistenceError,
    ServerError,
    ValidationError,
)
from usergate.domain.shared.time import utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "PersistenceError",
    "ServerError",
    "ValidationError",
    "utc_now",
]

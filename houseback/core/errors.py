"""
Error taxonomy shared by the validator, hasher, repository and services.
Only services turn these into responses; the kind is what clients see, never the message of the cause.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    HASHING_FAILURE = "hashing_failure"
    STORAGE_TIMEOUT = "storage_timeout"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    UNKNOWN = "unknown_internal_error"


@dataclass(frozen=True)
class FieldError:
    """One broken rule for one input field."""

    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class HousebackError(Exception):
    """Base for all domain errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class ValidationError(HousebackError):
    """Client-fixable input problems. Carries every violated rule, not just the first."""

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: list[FieldError]):
        super().__init__(f"{len(errors)} invalid field(s)")
        self.errors = errors


class ConflictError(HousebackError):
    """Unique constraint violation (email already registered)."""

    kind = ErrorKind.CONFLICT


class HashingFailure(HousebackError):
    """Unexpected fault in the password hashing backend."""

    kind = ErrorKind.HASHING_FAILURE


class StorageError(HousebackError):
    """Database could not complete the operation. Potentially retryable by the caller."""

    kind = ErrorKind.STORAGE_UNAVAILABLE


class StorageTimeout(StorageError):
    kind = ErrorKind.STORAGE_TIMEOUT


class StorageUnavailable(StorageError):
    kind = ErrorKind.STORAGE_UNAVAILABLE

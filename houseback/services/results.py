"""
Service outcomes. Each result knows its HTTP status and body, so rendering a response
is one total mapping with a single exit.
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar

from houseback.core.errors import ErrorKind, FieldError
from houseback.schemas.user import TokenResponse, UserPublic


class ServiceResult:
    status_code: ClassVar[int]
    outcome: ClassVar[str]

    def payload(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Created(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.CREATED
    outcome: ClassVar[str] = "created"

    user: UserPublic

    def payload(self) -> dict[str, Any]:
        return self.user.model_dump(mode="json")


@dataclass(frozen=True)
class ValidationFailed(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.BAD_REQUEST
    outcome: ClassVar[str] = "validation_failed"

    errors: list[FieldError] = field(default_factory=list)

    def payload(self) -> dict[str, Any]:
        return {
            "message": "Invalid data",
            "kind": ErrorKind.VALIDATION.value,
            "errors": [err.as_dict() for err in self.errors],
        }


@dataclass(frozen=True)
class Conflict(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.CONFLICT
    outcome: ClassVar[str] = "conflict"

    email: str

    def payload(self) -> dict[str, Any]:
        return {"message": "Email already registered", "kind": ErrorKind.CONFLICT.value}


@dataclass(frozen=True)
class Authenticated(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.OK
    outcome: ClassVar[str] = "authenticated"

    token: TokenResponse

    def payload(self) -> dict[str, Any]:
        return self.token.model_dump(mode="json")


@dataclass(frozen=True)
class InvalidCredentials(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.UNAUTHORIZED
    outcome: ClassVar[str] = "invalid_credentials"

    def payload(self) -> dict[str, Any]:
        return {"message": "Invalid email or password", "kind": ErrorKind.INVALID_CREDENTIALS.value}


@dataclass(frozen=True)
class InternalError(ServiceResult):
    status_code: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR
    outcome: ClassVar[str] = "internal_error"

    kind: ErrorKind = ErrorKind.UNKNOWN

    def payload(self) -> dict[str, Any]:
        # Generic message only; details stay in the log
        return {"message": "Internal server error", "kind": self.kind.value}


RegistrationResult = Created | ValidationFailed | Conflict | InternalError
SigninResult = Authenticated | ValidationFailed | InvalidCredentials | InternalError

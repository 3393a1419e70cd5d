"""User request/response schemas - API contract and validation."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes; longer secrets are rejected instead of silently truncated.
BCRYPT_MAX_BYTES = 72


class SignupRequest(BaseModel):
    """Raw signup body, untyped on purpose: type errors are reported by the validator
    together with every other broken rule."""

    email: Any = None
    name: Any = None
    password: Any = Field(default=None, repr=False)


class SigninRequest(BaseModel):
    email: Any = None
    password: Any = Field(default=None, repr=False)


class RegistrationInput(BaseModel):
    """Validated, normalized signup triple. The password is never stripped or altered."""

    email: EmailStr
    name: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, repr=False)

    @field_validator("email", "name", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class SigninInput(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class UserPublic(BaseModel):
    """Stored user as clients see it. Never carries the password hash."""

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic

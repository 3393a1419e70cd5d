"""
Registration service - signup use case.
Flow: validate -> hash -> persist -> shape. Any failure ends the flow with a result; nothing is retried.
Design: Service depends on injected collaborators (repository, hasher, logger); easy to test with fakes.
"""

import asyncio
import logging
from typing import Any

from houseback.core.errors import (
    ConflictError,
    ErrorKind,
    HashingFailure,
    StorageError,
    ValidationError,
)
from houseback.core.security import PasswordHasher
from houseback.db.models.user import User
from houseback.db.repositories.user_repository import UserRepository
from houseback.services.results import (
    Conflict,
    Created,
    InternalError,
    RegistrationResult,
    ValidationFailed,
)
from houseback.services.validation import validate_registration


class RegistrationService:
    """Creates users. Only the hasher ever sees the plaintext password."""

    def __init__(self, repository: UserRepository, hasher: PasswordHasher, logger: logging.Logger):
        self.repository = repository
        self.hasher = hasher
        self.logger = logger

    async def register(
        self, email: Any, name: Any, password: Any
    ) -> RegistrationResult:
        try:
            data = validate_registration(email, name, password)
        except ValidationError as exc:
            self.logger.info(
                "Signup rejected: invalid %s", ", ".join(sorted({e.field for e in exc.errors}))
            )
            return ValidationFailed(exc.errors)

        try:
            # bcrypt is CPU-bound; keep the event loop free for other requests
            password_hash = await asyncio.to_thread(self.hasher.hash, data.password)
        except HashingFailure:
            self.logger.exception("Password hashing failed during signup")
            return InternalError(ErrorKind.HASHING_FAILURE)
        email = data.email
        user = User(name=data.name, email=email, password_hash=password_hash)
        del data, password

        try:
            stored = await self.repository.create(user)
        except ConflictError:
            self.logger.info("Signup conflict: email already registered")
            return Conflict(email)
        except StorageError as exc:
            self.logger.error("Signup storage failure (%s): %s", exc.kind.value, exc.__cause__)
            return InternalError(exc.kind)
        except Exception:
            self.logger.exception("Unexpected error while persisting user")
            return InternalError(ErrorKind.UNKNOWN)

        self.logger.info("User created: id=%s", stored.id)
        return Created(stored)

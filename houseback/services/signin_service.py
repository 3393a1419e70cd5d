"""
Signin service - checks credentials and issues a bearer token.
Unknown email and wrong password produce the same result and take comparable time.
"""

import asyncio
import logging
from typing import Any

from houseback.config import Settings
from houseback.core.errors import ErrorKind, HashingFailure, StorageError, ValidationError
from houseback.core.security import PasswordHasher, create_access_token
from houseback.db.repositories.user_repository import UserRepository
from houseback.schemas.user import TokenResponse, UserPublic
from houseback.services.results import (
    Authenticated,
    InternalError,
    InvalidCredentials,
    SigninResult,
    ValidationFailed,
)
from houseback.services.validation import validate_signin


class SigninService:
    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        settings: Settings,
        logger: logging.Logger,
    ):
        self.repository = repository
        self.hasher = hasher
        self.settings = settings
        self.logger = logger

    async def authenticate(self, email: Any, password: Any) -> SigninResult:
        try:
            data = validate_signin(email, password)
        except ValidationError as exc:
            return ValidationFailed(exc.errors)

        try:
            user = await self.repository.get_by_email(data.email)
        except StorageError as exc:
            self.logger.error("Signin storage failure (%s): %s", exc.kind.value, exc.__cause__)
            return InternalError(exc.kind)

        try:
            if user is None:
                await asyncio.to_thread(self.hasher.dummy_verify)
                valid = False
            else:
                valid = await asyncio.to_thread(self.hasher.verify, data.password, user.password_hash)
        except HashingFailure:
            self.logger.exception("Password verification failed during signin")
            return InternalError(ErrorKind.HASHING_FAILURE)

        if not valid:
            self.logger.info("Signin rejected: invalid credentials")
            return InvalidCredentials()

        token = create_access_token(user.id, self.settings)
        self.logger.info("Signin succeeded: id=%s", user.id)
        return Authenticated(TokenResponse(access_token=token, user=UserPublic.model_validate(user)))

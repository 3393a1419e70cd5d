"""
FastAPI dependencies - wire settings, hasher, logger and repositories into services.
Everything comes from app.state, built once by create_app from the settings it was given.
Tests override get_password_hasher / get_db instead of patching module globals.
"""

from typing import Annotated

from fastapi import Depends, Request

from houseback.config import Settings
from houseback.core.logging import get_logger
from houseback.core.security import PasswordHasher
from houseback.db.repositories.user_repository import UserRepository
from houseback.db.session import DbSession
from houseback.services.registration_service import RegistrationService
from houseback.services.signin_service import SigninService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
HasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


def get_registration_service(session: DbSession, hasher: HasherDep) -> RegistrationService:
    return RegistrationService(
        repository=UserRepository(session),
        hasher=hasher,
        logger=get_logger("houseback.registration"),
    )


def get_signin_service(
    session: DbSession, hasher: HasherDep, settings: SettingsDep
) -> SigninService:
    return SigninService(
        repository=UserRepository(session),
        hasher=hasher,
        settings=settings,
        logger=get_logger("houseback.signin"),
    )


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
SigninServiceDep = Annotated[SigninService, Depends(get_signin_service)]

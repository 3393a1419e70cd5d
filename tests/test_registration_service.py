"""
Registration service tests - validate -> hash -> persist, with fakes for the failure paths
and a real database for uniqueness and the concurrent signup race.
"""

import asyncio
import logging
import threading
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from houseback.core.errors import ErrorKind, HashingFailure, StorageTimeout, StorageUnavailable
from houseback.db.models.user import User
from houseback.db.repositories.user_repository import UserRepository
from houseback.services.registration_service import RegistrationService
from houseback.services.results import Conflict, Created, InternalError, ValidationFailed

PASSWORD = "mypassword123"


async def _count(session_maker, email: str) -> int:
    async with session_maker() as s:
        result = await s.execute(select(func.count()).select_from(User).where(User.email == email))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_register_creates_user(session, hasher, logger):
    service = RegistrationService(UserRepository(session), hasher, logger)
    result = await service.register("john@example.com", "John Doe", PASSWORD)
    await session.commit()

    assert isinstance(result, Created)
    body = result.payload()
    assert set(body) == {"id", "name", "email", "created_at", "updated_at"}
    assert body["name"] == "John Doe"
    assert PASSWORD not in str(body)


@pytest.mark.asyncio
async def test_stored_hash_verifies(session, hasher, logger):
    service = RegistrationService(UserRepository(session), hasher, logger)
    await service.register("john@example.com", "John Doe", PASSWORD)
    await session.commit()

    user = await UserRepository(session).get_by_email("john@example.com")
    assert user.password_hash != PASSWORD
    assert hasher.verify(PASSWORD, user.password_hash)


@pytest.mark.asyncio
async def test_invalid_input_performs_no_side_effects(logger):
    repository = MagicMock()
    repository.create = AsyncMock()
    hasher = MagicMock()
    service = RegistrationService(repository, hasher, logger)

    result = await service.register("not-an-email", "ab", "short")

    assert isinstance(result, ValidationFailed)
    assert {err.field for err in result.errors} == {"email", "name", "password"}
    hasher.hash.assert_not_called()
    repository.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_input_twice_gives_same_errors(logger):
    service = RegistrationService(MagicMock(), MagicMock(), logger)
    first = await service.register("not-an-email", "ab", "short")
    second = await service.register("not-an-email", "ab", "short")
    assert first.payload() == second.payload()


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(session_maker, hasher, logger):
    for name, expected in (("First User", Created), ("Second User", Conflict)):
        async with session_maker() as session:
            service = RegistrationService(UserRepository(session), hasher, logger)
            result = await service.register("a@x.com", name, "another-password")
            await session.commit()
        assert isinstance(result, expected)

    assert await _count(session_maker, "a@x.com") == 1


@pytest.mark.asyncio
async def test_email_case_does_not_bypass_uniqueness(session_maker, hasher, logger):
    results = []
    for email in ("Case@X.com", "case@x.COM"):
        async with session_maker() as session:
            service = RegistrationService(UserRepository(session), hasher, logger)
            results.append(await service.register(email, "Case User", PASSWORD))
            await session.commit()
    assert isinstance(results[0], Created)
    assert isinstance(results[1], Conflict)


@pytest.mark.asyncio
async def test_concurrent_duplicate_signups_have_one_winner(session_maker, hasher, logger):
    async def attempt(i: int):
        async with session_maker() as session:
            service = RegistrationService(UserRepository(session), hasher, logger)
            result = await service.register("race@example.com", f"Racer {i}", PASSWORD)
            await session.commit()
            return result

    results = await asyncio.gather(*(attempt(i) for i in range(5)))

    assert sum(isinstance(r, Created) for r in results) == 1
    assert sum(isinstance(r, Conflict) for r in results) == 4
    assert await _count(session_maker, "race@example.com") == 1


@pytest.mark.asyncio
async def test_hashing_failure_is_internal_error(logger):
    repository = MagicMock()
    repository.create = AsyncMock()
    hasher = MagicMock()
    hasher.hash.side_effect = HashingFailure("backend missing")
    service = RegistrationService(repository, hasher, logger)

    result = await service.register("john@example.com", "John Doe", PASSWORD)

    assert result == InternalError(ErrorKind.HASHING_FAILURE)
    repository.create.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, kind",
    [
        (StorageTimeout("slow"), ErrorKind.STORAGE_TIMEOUT),
        (StorageUnavailable("down"), ErrorKind.STORAGE_UNAVAILABLE),
        (RuntimeError("surprise"), ErrorKind.UNKNOWN),
    ],
)
async def test_storage_failures_are_internal_errors(hasher, logger, error, kind):
    repository = MagicMock()
    repository.create = AsyncMock(side_effect=error)
    service = RegistrationService(repository, hasher, logger)

    result = await service.register("john@example.com", "John Doe", PASSWORD)

    assert result == InternalError(kind)
    assert result.payload() == {"message": "Internal server error", "kind": kind.value}


@pytest.mark.asyncio
async def test_password_never_logged(session, hasher, logger, caplog):
    caplog.set_level(logging.DEBUG, logger="tests.houseback")
    service = RegistrationService(UserRepository(session), hasher, logger)

    await service.register("john@example.com", "John Doe", PASSWORD)
    await service.register("john@example.com", "John Doe", PASSWORD)
    await service.register("bad", "ab", "short")

    assert PASSWORD not in caplog.text
    assert "short" not in caplog.text
    assert "$2b$" not in caplog.text


@pytest.mark.asyncio
async def test_hashing_runs_off_the_event_loop_thread(logger):
    repository = MagicMock()
    repository.create = AsyncMock()
    seen = []

    def fake_hash(plaintext):
        seen.append(threading.get_ident())
        return "$2b$04$fake"

    hasher = MagicMock()
    hasher.hash.side_effect = fake_hash
    service = RegistrationService(repository, hasher, logger)

    await service.register("john@example.com", "John Doe", PASSWORD)

    assert seen and seen[0] != threading.get_ident()
    repository.create.assert_awaited_once()

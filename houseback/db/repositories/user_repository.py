"""
User repository - encapsulates all user data access.
Uniqueness of email is enforced by the database, never by a read-then-write check.
"""

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from houseback.db.models.user import User
from houseback.db.repositories.base_repository import BaseRepository, storage_error
from houseback.schemas.user import UserPublic


class UserRepository(BaseRepository[User]):
    """User-specific queries on top of the generic insert."""

    def __init__(self, session):
        super().__init__(session, User)

    async def create(self, user: User) -> UserPublic:
        """Insert and commit a new user. Raises ConflictError when the email is taken.

        Returns only once the row is durable, so a failed COMMIT is reported
        as a StorageError instead of a created user.
        """
        stored = UserPublic.model_validate(await self.add(user))
        await self.commit()
        return stored

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for signin."""
        try:
            result = await self.session.execute(select(User).where(User.email == email))
        except (PoolTimeoutError, TimeoutError, DBAPIError) as exc:
            raise storage_error(exc) from exc
        return result.scalar_one_or_none()
